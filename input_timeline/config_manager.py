import json
from typing import Dict, Any, Optional, List

class ConfigError(ValueError):
    """Custom exception for configuration errors."""
    pass

DEFAULT_SETTINGS: Dict[str, Any] = {
    "display_seconds": 4,
    "pixels_per_ms": 0.05,
    "line_length": 200,
    "row_height": 16,
    "purge_interval": 0.2,
    "purge_margin": 0.5,
    "frequency_threshold": 4,
    "elapsed_threshold": 2.0,
    "poll_interval": 0.01,
    "input_source": "gamepad",
    "controller_type": "SNES",
}

VALID_INPUT_SOURCES = ["gamepad"]

# Button id, color
DEFAULT_MAPPING_SETS: Dict[str, List[tuple]] = {
    "NES": [
        ("UP", "lightgreen"), ("DOWN", "lightgreen"), ("LEFT", "lightgreen"), ("RIGHT", "lightgreen"),
        ("B", "gold"), ("A", "deepskyblue"), ("SELECT", "powderblue"), ("START", "powderblue"),
    ],
    "SNES": [
        ("UP", "lightgreen"), ("DOWN", "lightgreen"), ("LEFT", "lightgreen"), ("RIGHT", "lightgreen"),
        ("B", "gold"), ("A", "darkred"), ("Y", "darkgreen"), ("X", "deepskyblue"),
        ("L", "silver"), ("R", "silver"), ("SELECT", "powderblue"), ("START", "powderblue"),
    ],
    "GENESIS": [
        ("UP", "lightgreen"), ("DOWN", "lightgreen"), ("LEFT", "lightgreen"), ("RIGHT", "lightgreen"),
        ("A", "silver"), ("B", "silver"), ("C", "silver"),
        ("X", "darkslategray"), ("Y", "darkslategray"), ("Z", "darkslategray"),
        ("START", "powderblue"), ("MODE", "powderblue"),
    ],
    "GAMEPAD": [
        ("UP", "lightgreen"), ("DOWN", "lightgreen"), ("LEFT", "lightgreen"), ("RIGHT", "lightgreen"),
        ("A", "darkred"), ("B", "gold"), ("X", "deepskyblue"), ("Y", "darkgreen"),
        ("L", "silver"), ("R", "silver"), ("SELECT", "powderblue"), ("START", "powderblue"),
    ],
}


class ButtonMapping:
    """Display metadata for one tracked button."""
    def __init__(self, button: str, label: Optional[str] = None, color: str = "white",
                 visible: bool = True, order: int = 0):
        self.button: str = button
        self.label: str = label if label is not None else button[:1]
        self.color: str = color
        self.visible: bool = visible
        self.order: int = order

    def to_dict(self) -> Dict[str, Any]:
        return {
            "button": self.button,
            "label": self.label,
            "color": self.color,
            "visible": self.visible,
            "order": self.order,
        }

    def __repr__(self) -> str:
        return f"ButtonMapping({self.to_dict()})"


def default_mappings(controller_type: str) -> List[ButtonMapping]:
    """Mapping set for a controller type, in display order."""
    try:
        entries = DEFAULT_MAPPING_SETS[controller_type.upper()]
    except KeyError:
        raise ConfigError(f"Unknown controller type '{controller_type}'. "
                          f"Expected one of {sorted(DEFAULT_MAPPING_SETS)}")
    return [ButtonMapping(button, color=color, order=i) for i, (button, color) in enumerate(entries)]


class ConfigManager:
    def __init__(self, config_path: Optional[str] = None):
        self._config_path = config_path
        self._config_data: Dict[str, Any] = self._load_and_validate_config()
        if config_path:
            print(f"[Config] Configuration loaded and validated from {config_path}")
        else:
            print("[Config] No configuration file given, using defaults")

    def _load_and_validate_config(self) -> Dict[str, Any]:
        if not self._config_path:
            config_data: Dict[str, Any] = {}
        else:
            try:
                with open(self._config_path, 'r') as f:
                    config_data = json.load(f)
            except FileNotFoundError:
                raise ConfigError(f"Configuration file not found: {self._config_path}")
            except json.JSONDecodeError as e:
                raise ConfigError(f"Error decoding JSON from {self._config_path}: {e}")

        return self._validate_config(config_data)

    def _validate_config(self, config: Any) -> Dict[str, Any]:
        if not isinstance(config, dict):
            raise ConfigError("Configuration root must be a dictionary.")

        # Validate 'settings'
        settings = config.get("settings", {})
        if not isinstance(settings, dict):
            raise ConfigError("'settings' section must be a dictionary.")
        expected_settings = {
            "display_seconds": (float, int), "pixels_per_ms": (float, int),
            "line_length": int, "row_height": int,
            "purge_interval": (float, int), "purge_margin": (float, int),
            "frequency_threshold": int, "elapsed_threshold": (float, int),
            "poll_interval": (float, int),
            "input_source": str, "controller_type": str,
        }
        merged = dict(DEFAULT_SETTINGS)
        for key, expected_type in expected_settings.items():
            if key not in settings:
                continue
            value = settings[key]
            if isinstance(value, bool) or not isinstance(value, expected_type):
                raise ConfigError(f"Setting '{key}' must be of type {expected_type}. Found: {type(value)} ({value})")
            merged[key] = value

        for key in ("display_seconds", "pixels_per_ms", "line_length", "row_height", "purge_interval"):
            if merged[key] <= 0:
                raise ConfigError(f"Setting '{key}' must be positive. Found: {merged[key]}")
        if merged["purge_margin"] < 0:
            raise ConfigError(f"Setting 'purge_margin' must not be negative. Found: {merged['purge_margin']}")
        if merged["input_source"] not in VALID_INPUT_SOURCES:
            raise ConfigError(f"Setting 'input_source' must be one of {VALID_INPUT_SOURCES}. Found: {merged['input_source']}")

        # Validate 'buttons'
        buttons = config.get("buttons")
        if buttons is None:
            mappings = default_mappings(merged["controller_type"])
        else:
            if not isinstance(buttons, list):
                raise ConfigError("'buttons' section must be a list.")
            mappings = []
            seen = set()
            for index, details in enumerate(buttons):
                if not isinstance(details, dict):
                    raise ConfigError(f"Button entry {index} must be a dictionary.")
                name = details.get("button")
                if not isinstance(name, str) or not name:
                    raise ConfigError(f"Button entry {index} must have a non-empty string 'button'.")
                if name in seen:
                    raise ConfigError(f"Button '{name}' is mapped more than once.")
                seen.add(name)
                label = details.get("label")
                if label is not None and not isinstance(label, str):
                    raise ConfigError(f"Button '{name}' 'label' must be a string.")
                color = details.get("color", "white")
                if not isinstance(color, str):
                    raise ConfigError(f"Button '{name}' 'color' must be a string.")
                visible = details.get("visible", True)
                if not isinstance(visible, bool):
                    raise ConfigError(f"Button '{name}' 'visible' must be true or false.")
                order = details.get("order", index)
                if isinstance(order, bool) or not isinstance(order, int):
                    raise ConfigError(f"Button '{name}' 'order' must be an integer.")
                mappings.append(ButtonMapping(name, label, color, visible, order))

        return {"settings": merged, "buttons": mappings}

    def get_settings(self) -> Dict[str, Any]:
        return self._config_data["settings"]

    def get_specific_setting(self, key: str, default: Any = None) -> Any:
        return self._config_data["settings"].get(key, default)

    def get_button_mappings(self) -> List[ButtonMapping]:
        return list(self._config_data["buttons"])

    def get_retention(self) -> float:
        """Purge retention: the visible window plus the safety margin."""
        settings = self.get_settings()
        return float(settings["display_seconds"]) + float(settings["purge_margin"])

    def get_config_path(self) -> Optional[str]:
        return self._config_path
