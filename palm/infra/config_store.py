import json
import os

from palm.constants import DEFAULT_LOG_LEVEL, QT_WINDOW_DEFAULT_GEOMETRY
from palm.paths import CONFIG_DIR, CONFIG_FILE, DATABASE_FILE


class Config:
    """Persistent configuration manager."""

    def __init__(self):
        self.load_error = None
        self.data = {
            "database_path": DATABASE_FILE,
            "window_geometry": QT_WINDOW_DEFAULT_GEOMETRY,
            "log_level": DEFAULT_LOG_LEVEL,
        }
        self.load()

    def load(self):
        self.load_error = None
        if os.path.exists(CONFIG_FILE):
            try:
                with open(CONFIG_FILE, "r", encoding="utf-8") as f:
                    saved = json.load(f)
                if not isinstance(saved, dict):
                    raise ValueError("Config payload must be a JSON object.")
                self.data.update(saved)
            except (OSError, json.JSONDecodeError, TypeError, ValueError) as exc:
                self.load_error = str(exc)

    def save(self):
        os.makedirs(CONFIG_DIR, exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.data[key] = value
        self.save()
