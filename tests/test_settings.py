import json
import os
import tempfile
import unittest

from core import settings
from core.settings import SettingsManager, DEFAULT_SETTINGS, SETTINGS_PATH_ENV


class TestSettingsManager(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.temp_dir.name, "nested", "settings.json")
        self._old_env = os.environ.get(SETTINGS_PATH_ENV)
        os.environ[SETTINGS_PATH_ENV] = self.path
        SettingsManager._instance = None

    def tearDown(self) -> None:
        SettingsManager._instance = None
        if self._old_env is None:
            os.environ.pop(SETTINGS_PATH_ENV, None)
        else:
            os.environ[SETTINGS_PATH_ENV] = self._old_env
        self.temp_dir.cleanup()

    def test_defaults_when_file_missing(self) -> None:
        sm = SettingsManager()
        self.assertEqual(sm.file_path, self.path)
        for key, value in DEFAULT_SETTINGS.items():
            self.assertEqual(sm.get(key), value)

    def test_set_persists_and_reloads(self) -> None:
        SettingsManager().set("volume", 0.25)
        with open(self.path, "r", encoding="utf-8") as f:
            self.assertEqual(json.load(f)["volume"], 0.25)

        SettingsManager._instance = None
        self.assertEqual(SettingsManager().get("volume"), 0.25)

    def test_is_a_singleton(self) -> None:
        self.assertIs(SettingsManager(), SettingsManager())

    def test_partial_file_keeps_defaults_for_missing_keys(self) -> None:
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"mute": True, "extra": 1}, f)

        sm = SettingsManager()
        self.assertTrue(sm.get("mute"))
        self.assertEqual(sm.get("window_opacity"), DEFAULT_SETTINGS["window_opacity"])
        self.assertEqual(sm.get("extra"), 1)

    def test_corrupted_file_falls_back_to_defaults(self) -> None:
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")

        with self.assertLogs(settings.logger, level="WARNING"):
            sm = SettingsManager()
        self.assertEqual(sm.data, DEFAULT_SETTINGS)

    def test_wrong_typed_values_keep_defaults(self) -> None:
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"window_opacity": "0.5", "volume": True, "mute": 1, "always_on_top": False}, f)

        with self.assertLogs(settings.logger, level="WARNING") as logs:
            sm = SettingsManager()
        self.assertEqual(len(logs.records), 3)
        self.assertEqual(sm.get("window_opacity"), DEFAULT_SETTINGS["window_opacity"])
        self.assertEqual(sm.get("volume"), DEFAULT_SETTINGS["volume"])
        self.assertEqual(sm.get("mute"), DEFAULT_SETTINGS["mute"])
        self.assertFalse(sm.get("always_on_top"))

    def test_int_accepted_for_float_setting(self) -> None:
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"window_opacity": 1, "volume": 0}, f)

        sm = SettingsManager()
        self.assertEqual(sm.get("window_opacity"), 1)
        self.assertEqual(sm.get("volume"), 0)

    def test_non_object_file_falls_back_to_defaults(self) -> None:
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([1, 2, 3], f)

        with self.assertLogs(settings.logger, level="WARNING"):
            sm = SettingsManager()
        self.assertEqual(sm.data, DEFAULT_SETTINGS)


if __name__ == "__main__":
    unittest.main()
