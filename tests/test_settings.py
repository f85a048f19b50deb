import json
import tempfile
import unittest
from pathlib import Path

from gravel_core.settings import DEFAULT_CONFIG, load_config, total_ticks
from gravel_core.state import SimulationState


class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, payload):
        path = self.tmp / "config.json"
        path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
        return path

    def test_missing_file_gives_defaults(self):
        config = load_config(self.tmp / "nope.json")
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertIsNot(config, DEFAULT_CONFIG)
        self.assertEqual(load_config(None), DEFAULT_CONFIG)

    def test_overrides_and_coercion(self):
        config = load_config(self.write({"rows": 5, "cycle_range": [10, 20], "motion_probability": 1, "extra": "kept"}))
        self.assertEqual(config["rows"], 5)
        self.assertEqual(config["cycle_range"], (10, 20))
        self.assertIsInstance(config["motion_probability"], float)
        self.assertEqual(config["extra"], "kept")
        self.assertEqual(config["cols"], 12)

    def test_broken_json_raises(self):
        with self.assertRaises(RuntimeError):
            load_config(self.write("{not json"))

    def test_total_ticks(self):
        self.assertEqual(total_ticks(DEFAULT_CONFIG), 1800)
        self.assertEqual(total_ticks({"fps": 24, "seconds": 2}), 48)

    def test_state_from_config(self):
        config = dict(DEFAULT_CONFIG, displacement_adjust=-2.0, motion_probability=0.25)
        state = SimulationState.from_config(config, self.tmp)
        self.assertEqual(state.displacement_adjust, 0.0)
        self.assertEqual(state.motion_probability, 0.25)
        self.assertFalse(state.recording)
        self.assertEqual(state.tick_count, 0)

    def test_motion_probability_is_clamped(self):
        high = SimulationState.from_config(dict(DEFAULT_CONFIG, motion_probability=1.5), self.tmp)
        low = SimulationState.from_config(dict(DEFAULT_CONFIG, motion_probability=-1), self.tmp)
        self.assertEqual(high.motion_probability, 1.0)
        self.assertEqual(low.motion_probability, 0.0)


if __name__ == "__main__":
    unittest.main()
