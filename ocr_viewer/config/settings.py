"""Configuration dataclass and loading utilities.

Provides a strongly-typed configuration object that is injected into the
backend and services instead of module-level globals. Values are resolved in
this order, later wins:

1. ``DEFAULT_CONFIG``
2. the JSON config file (``config.json`` by default)
3. ``OCR_VIEWER_<KEY>`` environment variables, e.g. ``OCR_VIEWER_MODEL_PATH``
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Mapping, Optional
import json, os, logging

from .defaults import DEFAULT_CONFIG
from ..core.constants import INPUT_SIZE_MULTIPLE
from ..core.exceptions import ConfigError

ENV_PREFIX = "OCR_VIEWER_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(slots=True)
class Config:
    # Text detection
    model_path: str = DEFAULT_CONFIG["model_path"]
    input_width: int = DEFAULT_CONFIG["input_width"]
    input_height: int = DEFAULT_CONFIG["input_height"]
    confidence_threshold: float = DEFAULT_CONFIG["confidence_threshold"]
    nms_threshold: float = DEFAULT_CONFIG["nms_threshold"]
    detect_text_areas: bool = DEFAULT_CONFIG["detect_text_areas"]

    # OCR
    tesseract_lang: str = DEFAULT_CONFIG["tesseract_lang"]
    tessdata_dir: str = DEFAULT_CONFIG["tessdata_dir"]
    tesseract_cmd: str = DEFAULT_CONFIG["tesseract_cmd"]

    # Screen capture
    capture_delay_ms: int = DEFAULT_CONFIG["capture_delay_ms"]

    # Logging
    log_level: str = DEFAULT_CONFIG["log_level"]
    log_dir: str = DEFAULT_CONFIG["log_dir"]
    enable_file_logging: bool = DEFAULT_CONFIG["enable_file_logging"]
    structured_logging: bool = DEFAULT_CONFIG["structured_logging"]

    # Arbitrary extra values retained for forward compatibility
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def input_size(self):
        """Detector input size as (width, height)."""
        return (self.input_width, self.input_height)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        # merge extra keys at top-level for saving
        extra = d.pop("extra", {})
        d.update(extra)
        return d

    def validate(self) -> None:
        """Raise ConfigError for values the detection pipeline cannot use."""
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ConfigError(
                f"confidence_threshold must be in [0, 1], got {self.confidence_threshold}"
            )
        if not 0.0 < self.nms_threshold <= 1.0:
            raise ConfigError(f"nms_threshold must be in (0, 1], got {self.nms_threshold}")
        for name in ("input_width", "input_height"):
            value = getattr(self, name)
            if value <= 0 or value % INPUT_SIZE_MULTIPLE:
                raise ConfigError(
                    f"{name} must be a positive multiple of {INPUT_SIZE_MULTIPLE}, got {value}"
                )
        if self.capture_delay_ms < 0:
            raise ConfigError(f"capture_delay_ms must not be negative, got {self.capture_delay_ms}")


def _coerce(key: str, raw: str, default: Any) -> Any:
    """Convert an environment string to the type of the default value."""
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigError(f"{ENV_PREFIX}{key.upper()} must be a boolean, got {raw!r}")
    try:
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except ValueError as e:
        raise ConfigError(f"{ENV_PREFIX}{key.upper()}: {e}") from e
    return raw


def _apply_environment_overrides(data: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
    merged = dict(data)
    for key, default in DEFAULT_CONFIG.items():
        env_key = f"{ENV_PREFIX}{key.upper()}"
        if env_key in environ:
            merged[key] = _coerce(key, environ[env_key], default)
            logging.debug(f"Configuration '{key}' overridden by {env_key}")
    return merged


def _read_config_file(path: str) -> Dict[str, Any]:
    if not os.path.isfile(path):
        logging.info(f"Configuration file '{path}' does not exist. Using defaults.")
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded_data = json.load(f)
    except json.JSONDecodeError as e:
        logging.error(f"Failed to parse JSON configuration file '{path}': {e}. Using defaults.")
        return {}
    except OSError as e:
        logging.error(f"Could not read configuration file '{path}': {e}. Using defaults.")
        return {}

    if loaded_data is None:
        logging.warning(f"Configuration file '{path}' is empty, using defaults")
        return {}
    if not isinstance(loaded_data, dict):
        logging.error(f"Configuration file '{path}' does not contain a valid JSON object, using defaults")
        return {}
    logging.info(f"Successfully loaded configuration from '{path}'")
    return loaded_data


def load_config(path: str = "config.json", environ: Optional[Mapping[str, str]] = None) -> Config:
    """Load configuration from a JSON file plus environment overrides.

    Args:
        path: Path to config.json file
        environ: Environment mapping, ``os.environ`` when omitted

    Returns:
        Config: Loaded and validated configuration

    Raises:
        ConfigError: If a value is out of range or an override cannot be parsed.
    """
    data = _read_config_file(path)
    merged = {**DEFAULT_CONFIG, **data}
    merged = _apply_environment_overrides(merged, os.environ if environ is None else environ)

    known = set(Config.__dataclass_fields__) - {"extra"}
    extra = {k: v for k, v in merged.items() if k not in known}
    if extra:
        logging.info(f"Found extra configuration keys: {list(extra.keys())}")

    try:
        cfg = Config(**{k: merged[k] for k in known}, extra=extra)
    except TypeError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
    cfg.validate()
    return cfg


def save_config(cfg: Config, path: str = "config.json") -> None:
    """Save configuration to JSON, keeping a ``.backup`` of the previous file."""
    if os.path.exists(path):
        backup_path = f"{path}.backup"
        try:
            with open(path, "r", encoding="utf-8") as src, open(backup_path, "w", encoding="utf-8") as dst:
                dst.write(src.read())
            logging.debug(f"Created backup configuration at '{backup_path}'")
        except OSError as e:
            logging.warning(f"Failed to create configuration backup: {e}")

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(cfg.to_dict(), f, indent=2)
    except OSError as e:
        raise ConfigError(f"Failed to save configuration to '{path}': {e}") from e
    logging.info(f"Configuration saved to '{path}'")
