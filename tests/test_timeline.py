import unittest
from datetime import datetime, timedelta

import risk
from timeline import PILL, SYMPTOM, WATER, merge_events

T = datetime(2026, 3, 2, 10, 0)


class EventMergerTests(unittest.TestCase):
    def test_descending_order(self):
        water = [{"amount": 250.0, "timestamp": T}]
        meds = [{"medication_id": "m1", "name": "Ibuprofen", "dosage": "200mg",
                 "timestamp": T - timedelta(minutes=5)}]
        events = merge_events(water, meds)
        self.assertEqual([(e["type"], e["timestamp"]) for e in events],
                         [(WATER, T), (PILL, T - timedelta(minutes=5))])
        self.assertEqual(events[1]["label"], "Ibuprofen 200mg")

    def test_ties_keep_input_order(self):
        water = [{"amount": 250.0, "timestamp": T}]
        meds = [{"medication_id": "m1", "name": "Aspirin", "dosage": None, "timestamp": T}]
        symptoms = [{"symptom_id": "s1", "name": "Headache", "severity": 2, "timestamp": T}]
        events = merge_events(water, meds, symptoms)
        self.assertEqual([e["type"] for e in events], [WATER, PILL, SYMPTOM])
        self.assertEqual(events[1]["label"], "Aspirin")
        self.assertEqual(events[2]["label"], "Headache 2/5")

    def test_water_events_carry_their_own_window(self):
        water = [
            {"amount": 300.0, "timestamp": T - timedelta(minutes=30)},
            {"amount": 700.0, "timestamp": T},
        ]
        events = merge_events(water, [])
        latest, earlier = events
        self.assertEqual(latest["window_sum_ml"], 1000.0)
        self.assertEqual(latest["risk_level"], risk.HIGH)
        self.assertEqual(earlier["window_sum_ml"], 300.0)
        self.assertEqual(earlier["risk_level"], risk.LOW)
        self.assertEqual(earlier["window_start"], T - timedelta(minutes=90))
        self.assertIn("Remember to keep sipping", earlier["note"])

    def test_water_label_uses_display_unit(self):
        events = merge_events([{"amount": 236.588, "timestamp": T}], [], unit="oz")
        self.assertEqual(events[0]["label"], "8 oz")

    def test_symptoms_are_optional(self):
        self.assertEqual(merge_events([], [], None), [])


if __name__ == "__main__":
    unittest.main()
