import unittest
from datetime import datetime

import risk
from symptom_series import (
    AXIS_EPOCH_MS,
    AXIS_MINUTES,
    TODAY,
    WEEK,
    YESTERDAY,
    build_series,
    epoch_ms,
)


def symptom(name, severity, ts):
    return {"symptom_id": name.lower(), "name": name, "severity": severity, "timestamp": ts}


class SymptomSeriesTests(unittest.TestCase):
    def test_today_projects_last_sample_to_now(self):
        samples = [symptom("Headache", 3, datetime(2026, 3, 2, 9, 0))]
        series = build_series(samples, [], [], TODAY, datetime(2026, 3, 2, 14, 0))
        self.assertEqual(series["axis"], AXIS_MINUTES)
        self.assertEqual(series["points"], [{"time": 540, "Headache": 3}])
        self.assertEqual(series["projections"], [
            {"symptom": "Headache", "severity": 3, "from_time": 540, "to_time": 840},
        ])
        self.assertEqual(series["now"], 840)

    def test_historical_ranges_show_true_samples_only(self):
        samples = [
            symptom("Headache", 3, datetime(2026, 3, 1, 9, 0)),
            symptom("Nausea", 2, datetime(2026, 3, 1, 10, 0)),
        ]
        series = build_series(samples, [], [], YESTERDAY, datetime(2026, 3, 2, 14, 0))
        self.assertEqual(series["projections"], [])
        self.assertIsNone(series["now"])
        # no forward-fill: the 10:00 point does not repeat Headache
        self.assertEqual(series["points"], [
            {"time": 540, "Headache": 3},
            {"time": 600, "Nausea": 2},
        ])
        self.assertEqual(series["symptoms"], ["Headache", "Nausea"])

    def test_later_sample_wins_within_the_same_minute(self):
        samples = [
            symptom("Headache", 2, datetime(2026, 3, 2, 9, 0, 10)),
            symptom("Headache", 4, datetime(2026, 3, 2, 9, 0, 40)),
        ]
        series = build_series(samples, [], [], TODAY, datetime(2026, 3, 2, 9, 30))
        self.assertEqual(series["points"], [{"time": 540, "Headache": 4}])

    def test_week_keys_by_absolute_instant(self):
        a = datetime(2026, 3, 1, 9, 0)
        b = datetime(2026, 3, 2, 9, 0)
        series = build_series([symptom("Fatigue", 1, a), symptom("Fatigue", 5, b)], [], [],
                              WEEK, datetime(2026, 3, 2, 12, 0))
        self.assertEqual(series["axis"], AXIS_EPOCH_MS)
        self.assertEqual([p["time"] for p in series["points"]], [epoch_ms(a), epoch_ms(b)])
        self.assertEqual(epoch_ms(b) - epoch_ms(a), 24 * 60 * 60 * 1000)
        self.assertEqual(series["projections"], [])

    def test_reference_markers(self):
        meds = [{"medication_id": "m1", "name": "Aspirin", "dosage": "81mg",
                 "timestamp": datetime(2026, 3, 2, 8, 15)}]
        intake = [
            {"amount": 200.0, "timestamp": datetime(2026, 3, 2, 8, 0)},
            {"amount": 600.0, "timestamp": datetime(2026, 3, 2, 10, 0)},
            {"amount": 1000.0, "timestamp": datetime(2026, 3, 2, 12, 0)},
        ]
        series = build_series([], meds, intake, TODAY, datetime(2026, 3, 2, 13, 0))
        self.assertEqual(series["medications"], [{"time": 495, "label": "Aspirin 81mg"}])
        self.assertEqual(series["intake_markers"], [
            {"time": 480, "risk_level": risk.LOW, "y": 0, "label": "200 ml (low)"},
            {"time": 720, "risk_level": risk.HIGH, "y": 5, "label": "1000 ml (high)"},
        ])

    def test_week_markers_score_each_day_separately(self):
        intake = [
            {"amount": 400.0, "timestamp": datetime(2026, 3, 1, 23, 50)},
            {"amount": 400.0, "timestamp": datetime(2026, 3, 2, 0, 10)},
        ]
        series = build_series([], [], intake, WEEK, datetime(2026, 3, 2, 12, 0))
        self.assertEqual([m["risk_level"] for m in series["intake_markers"]], [risk.LOW, risk.LOW])


if __name__ == "__main__":
    unittest.main()
