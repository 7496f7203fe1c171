import os
import yaml

from settings_schema import SettingsSchema, validate_settings

APP_VERSION = "1.0.0"

BACKEND_URL_ENV = "WORKOUT_BACKEND_URL"


class YamlConfig:
    """Load and save client settings to a YAML file."""

    def __init__(self, path: str = "settings.yaml") -> None:
        self.path = path

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return data

    def save(self, data: dict) -> None:
        validate_settings(data)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(dict(data), f)


def load_settings(path: str | None = None) -> SettingsSchema:
    """Return validated settings, with the backend URL overridable from the environment."""
    path = path or os.environ.get("YAML_PATH", "settings.yaml")
    data = YamlConfig(path).load()
    url = os.environ.get(BACKEND_URL_ENV)
    if url:
        data["backend_url"] = url
    validate_settings(data)
    return SettingsSchema(**data)
