import json
import logging
import os
import sys

APP_NAME = "tictactoe"

SETTINGS_FILE = "settings.json"
SETTINGS_PATH_ENV = "TICTACTOE_SETTINGS_PATH"

DEFAULT_SETTINGS = {
    "volume": 0.5,
    "mute": False,
    "window_opacity": 1.0,  # 1.0 = fully opaque
    "always_on_top": True,
}

logger = logging.getLogger(__name__)


def get_app_dir():
    """Per-user config folder for the app (not created here)."""
    if sys.platform == "win32":
        # C:\Users\User\AppData\Roaming
        base_path = os.getenv('APPDATA') or os.path.expanduser("~")
    elif sys.platform == "darwin":
        base_path = os.path.expanduser("~/Library/Application Support")
    else:
        base_path = os.path.expanduser("~/.config")
    return os.path.join(base_path, APP_NAME)


def _valid_value(key, value):
    """A value for a known key must have the default's type; unknown keys pass through."""
    if key not in DEFAULT_SETTINGS:
        return True
    default = DEFAULT_SETTINGS[key]
    if isinstance(default, bool):
        return isinstance(value, bool)
    # bool is an int subclass but never a number here
    if isinstance(value, bool):
        return False
    if isinstance(default, float):
        return isinstance(value, (int, float))
    return isinstance(value, type(default))


class SettingsManager:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(SettingsManager, cls).__new__(cls)
            cls._instance.data = DEFAULT_SETTINGS.copy()
            cls._instance.file_path = cls._instance._get_settings_path()
            cls._instance.load()
        return cls._instance

    def _get_settings_path(self):
        override = os.getenv(SETTINGS_PATH_ENV)
        if override:
            return override

        app_dir = get_app_dir()
        try:
            os.makedirs(app_dir, exist_ok=True)
        except OSError as e:
            # No rights etc.: keep settings next to the working directory
            logger.warning("Could not create settings folder %s (%s), using %s", app_dir, e, SETTINGS_FILE)
            return SETTINGS_FILE
        return os.path.join(app_dir, SETTINGS_FILE)

    def load(self):
        if not os.path.exists(self.file_path):
            return
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read settings from %s (%s), using defaults", self.file_path, e)
            return
        if not isinstance(loaded, dict):
            logger.warning("Settings file %s does not hold an object, using defaults", self.file_path)
            return
        # Keys missing from the file keep their defaults
        for k, v in loaded.items():
            if _valid_value(k, v):
                self.data[k] = v
            else:
                logger.warning("Ignoring setting %s=%r from %s, keeping %r", k, v, self.file_path, DEFAULT_SETTINGS[k])

    def save(self):
        try:
            folder = os.path.dirname(self.file_path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            with open(self.file_path, "w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=4)
        except OSError as e:
            logger.warning("Could not save settings to %s (%s)", self.file_path, e)

    def get(self, key):
        return self.data.get(key, DEFAULT_SETTINGS.get(key))

    def set(self, key, value):
        self.data[key] = value
        self.save()
