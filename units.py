"""Volume units used for display. All stored volumes are millilitres."""

DEFAULT_UNIT = "ml"

UNITS = {
    "ml":   {"label": "Milliliters",  "short": "ml",   "ml_per_unit": 1.0},
    "oz":   {"label": "Fluid ounces", "short": "oz",   "ml_per_unit": 29.5735},
    "cups": {"label": "Cups",         "short": "cups", "ml_per_unit": 236.588},
    "l":    {"label": "Liters",       "short": "L",    "ml_per_unit": 1000.0},
}


def get_unit(key: str) -> dict:
    """Return the unit definition for key, falling back to millilitres."""
    k = (key or "").strip().lower()
    unit = UNITS.get(k) or UNITS[DEFAULT_UNIT]
    return {"key": k if k in UNITS else DEFAULT_UNIT, **unit}


def ml_to_unit(ml: float, unit: str = DEFAULT_UNIT) -> float:
    return round(ml / get_unit(unit)["ml_per_unit"], 1)


def unit_to_ml(value: float, unit: str = DEFAULT_UNIT) -> float:
    return value * get_unit(unit)["ml_per_unit"]


def format_volume(ml: float, unit: str = DEFAULT_UNIT) -> str:
    value = ml_to_unit(ml, unit)
    text = str(int(value)) if value == int(value) else str(value)
    return f"{text} {get_unit(unit)['short']}"
