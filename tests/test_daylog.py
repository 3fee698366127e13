import tempfile
import unittest
from datetime import date, datetime

import db
import daylog
from store import INTAKE, MEDICATION, SYMPTOM, Store
from symptom_series import TODAY, WEEK, YESTERDAY

TODAY_DATE = date(2026, 3, 8)


class DayLogTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.db_path = f"{self.tmp.name}/test.db"
        db.init_db(self.db_path)
        self.store = Store(self.db_path)

    def tearDown(self):
        self.tmp.cleanup()

    def test_rollover_archives_and_resets_with_goal(self):
        self.store.save_daily_log(INTAKE, date(2026, 3, 7), [
            {"amount": 500, "timestamp": "2026-03-07T08:10:00"},
            {"amount": 750, "timestamp": "2026-03-07T19:45:00"},
            {"amount": "bogus", "timestamp": "2026-03-07T20:00:00"},
        ], goal=2500)
        archived = daylog.roll_over(self.store, TODAY_DATE)
        self.assertEqual(archived, [(INTAKE, "2026-03-07")])
        history = self.store.load_history(INTAKE)
        self.assertEqual(history, [{
            "date": "2026-03-07", "total_ml": 1250.0, "goal_ml": 2500, "entry_count": 2,
            "entries": [{"hour": 8, "ml": 500.0}, {"hour": 19, "ml": 750.0}],
        }])
        record = self.store.load_log_record(INTAKE)
        self.assertEqual(record, {"date": "2026-03-08", "entries": [], "goal": 2500})
        self.assertEqual(daylog.roll_over(self.store, TODAY_DATE), [])

    def test_rollover_skips_empty_medication_and_symptom_logs(self):
        self.store.save_daily_log(MEDICATION, date(2026, 3, 7), [])
        self.store.save_daily_log(SYMPTOM, date(2026, 3, 7), [
            {"symptom_id": "s1", "name": "Headache", "severity": 4, "timestamp": "2026-03-07T09:30:00"},
        ])
        archived = daylog.roll_over(self.store, TODAY_DATE)
        self.assertEqual(archived, [(SYMPTOM, "2026-03-07")])
        self.assertEqual(self.store.load_history(MEDICATION), [])
        self.assertEqual(self.store.load_history(SYMPTOM), [{
            "date": "2026-03-07",
            "entries": [{"hour": 9, "symptom_id": "s1", "name": "Headache", "severity": 4}],
        }])
        self.assertEqual(self.store.load_log_record(MEDICATION), {"date": "2026-03-08", "entries": []})

    def test_rollover_accepts_browser_date_strings(self):
        self.store.put("water_log", {
            "date": "Sat Mar 07 2026",
            "entries": [{"amount": 300, "timestamp": "2026-03-07T10:00:00"}],
        })
        self.assertEqual(daylog.roll_over(self.store, TODAY_DATE), [(INTAKE, "2026-03-07")])

    def test_rollover_discards_unusable_date_tag(self):
        self.store.put("water_log", {"date": "someday", "entries": [], "goal": 1500})
        with self.assertLogs("daylog", level="WARNING"):
            self.assertEqual(daylog.roll_over(self.store, TODAY_DATE), [])
        self.assertEqual(self.store.load_history(INTAKE), [])
        self.assertEqual(self.store.load_log_record(INTAKE)["goal"], 1500)

    def test_rollover_archives_log_dated_after_today(self):
        self.store.save_daily_log(SYMPTOM, date(2026, 3, 9), [
            {"symptom_id": "s", "name": "Fatigue", "severity": 3, "timestamp": "2026-03-09T00:30:00"},
        ])
        with self.assertLogs("daylog", level="WARNING"):
            self.assertEqual(daylog.roll_over(self.store, TODAY_DATE), [(SYMPTOM, "2026-03-09")])
        self.assertEqual(self.store.load_history(SYMPTOM), [{
            "date": "2026-03-09",
            "entries": [{"hour": 0, "symptom_id": "s", "name": "Fatigue", "severity": 3}],
        }])
        self.assertEqual(self.store.load_log_record(SYMPTOM), {"date": "2026-03-08", "entries": []})

    def test_events_for_range(self):
        self.store.save_history(SYMPTOM, [
            {"date": "2026-03-01", "entries": [{"hour": 9, "symptom_id": "s", "name": "Fatigue", "severity": 2}]},
            {"date": "2026-03-02", "entries": [{"hour": 10, "symptom_id": "s", "name": "Fatigue", "severity": 3}]},
            {"date": "2026-03-07", "entries": [{"hour": 21, "symptom_id": "s", "name": "Fatigue", "severity": 5},
                                               {"hour": 99, "symptom_id": "s", "name": "Fatigue", "severity": 5}]},
        ])
        self.store.save_history(INTAKE, [
            {"date": "2026-03-07", "total_ml": 300, "goal_ml": 2000, "entry_count": 1,
             "entries": [{"hour": 7, "ml": 300}]},
        ])
        self.store.save_daily_log(SYMPTOM, TODAY_DATE, [
            {"symptom_id": "s", "name": "Fatigue", "severity": 1, "timestamp": "2026-03-08T08:00:00"},
        ])

        yesterday = daylog.events_for_range(self.store, YESTERDAY, TODAY_DATE)
        self.assertEqual([e["timestamp"] for e in yesterday[SYMPTOM]], [datetime(2026, 3, 7, 21, 0)])
        self.assertEqual(yesterday[INTAKE], [{"amount": 300.0, "timestamp": datetime(2026, 3, 7, 7, 0)}])

        week = daylog.events_for_range(self.store, WEEK, TODAY_DATE)
        self.assertEqual([e["severity"] for e in week[SYMPTOM]], [3, 5, 1])

        today = daylog.events_for_range(self.store, TODAY, TODAY_DATE)
        self.assertEqual([e["severity"] for e in today[SYMPTOM]], [1])
        self.assertEqual(today[INTAKE], [])

    def test_intake_days_merges_live_log(self):
        self.store.save_history(INTAKE, [
            {"date": "2026-03-07", "total_ml": 2100, "goal_ml": 2000, "entry_count": 3, "entries": []},
            {"date": "2026-03-06", "total_ml": "lots", "goal_ml": 2000, "entries": []},
        ])
        self.store.save_daily_log(INTAKE, TODAY_DATE, [
            {"amount": 400, "timestamp": "2026-03-08T09:15:00"},
        ], goal=1800)
        days, today_summary = daylog.intake_days(self.store, TODAY_DATE)
        self.assertEqual([d["date"] for d in days], ["2026-03-07", "2026-03-08"])
        self.assertEqual(today_summary["total_ml"], 400.0)
        self.assertEqual(today_summary["goal_ml"], 1800)


if __name__ == "__main__":
    unittest.main()
