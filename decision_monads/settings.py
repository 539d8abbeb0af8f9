"""
Settings loader for settings.yaml.

Usage:
    from decision_monads.settings import settings

    policy = settings.diagnostics.on_invalid
    mode = settings.get_nested("decision.default_mode", "first")
"""

import yaml
from pathlib import Path
from typing import List, Any


# Settings file shipped with the package
SETTINGS_FILE = Path(__file__).parent / "settings.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
INVALID_INPUT_POLICIES = ("degrade", "raise")
RUN_MODES = ("first", "last", "any")

# Used for anything the YAML file does not set
DEFAULTS = {
    "logging": {
        "level": "INFO",
    },
    "diagnostics": {
        "on_invalid": "degrade",
    },
    "decision": {
        "default_mode": "first",
        "enable_tracing": False,
    },
    "bool_table": {
        "degraded_result": True,
    },
}


class DotDict(dict):
    """Dict with attribute access: d.key instead of d['key']"""

    def __getattr__(self, key: str) -> Any:
        try:
            value = self[key]
            if isinstance(value, dict):
                return DotDict(value)
            return value
        except KeyError:
            raise AttributeError(f"Setting '{key}' not found")

    def __setattr__(self, key: str, value: Any) -> None:
        self[key] = value

    def get_nested(self, path: str, default: Any = None) -> Any:
        """Get a value by dotted path: 'decision.default_mode'"""
        keys = path.split('.')
        value = self
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge of two dicts (override wins)"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(filepath: Path = None) -> DotDict:
    """
    Load settings from a YAML file.

    Priority:
    1. Values from the YAML file
    2. DEFAULTS

    Args:
        filepath: Settings file (settings.yaml next to this module by default)

    Returns:
        DotDict with settings
    """
    filepath = filepath or SETTINGS_FILE

    # Start from a deep copy of the defaults
    config = _deep_merge({}, {k: dict(v) for k, v in DEFAULTS.items()})

    if filepath.exists():
        with open(filepath, "r", encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        config = _deep_merge(config, yaml_config)
    else:
        print(f"[settings] Settings file not found: {filepath}")
        print("[settings] Using default values")

    return DotDict(config)


def validate_settings(settings: DotDict) -> List[str]:
    """
    Validate settings.

    Returns:
        List of errors (empty if everything is OK)
    """
    errors = []

    level = str(settings.get_nested("logging.level", "")).upper()
    if level not in LOG_LEVELS:
        errors.append(f"logging.level must be one of {', '.join(LOG_LEVELS)}")

    policy = settings.get_nested("diagnostics.on_invalid")
    if policy not in INVALID_INPUT_POLICIES:
        errors.append(
            f"diagnostics.on_invalid must be one of {', '.join(INVALID_INPUT_POLICIES)}"
        )

    mode = settings.get_nested("decision.default_mode")
    if mode not in RUN_MODES:
        errors.append(f"decision.default_mode must be one of {', '.join(RUN_MODES)}")

    if not isinstance(settings.get_nested("decision.enable_tracing"), bool):
        errors.append("decision.enable_tracing must be a boolean")

    if not isinstance(settings.get_nested("bool_table.degraded_result"), bool):
        errors.append("bool_table.degraded_result must be a boolean")

    return errors


# Global settings instance (lazy)
_settings = None


def get_settings() -> DotDict:
    """Get the global settings (singleton)"""
    global _settings
    if _settings is None:
        _settings = load_settings()
        errors = validate_settings(_settings)
        if errors:
            print("[settings] Invalid settings:")
            for err in errors:
                print(f"  - {err}")
    return _settings


def reload_settings() -> DotDict:
    """Reload settings from the file"""
    global _settings
    _settings = None
    return get_settings()


# For convenient imports: from decision_monads.settings import settings
settings = get_settings()
