from config import _today_local
from daylog import roll_over
from store import Store


def get_store() -> Store:
    """Request-scoped store; stale live logs are rolled into history first."""
    store = Store()
    roll_over(store, _today_local())
    return store
