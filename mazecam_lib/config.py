# --- mazecam_lib/config.py ---
import configparser
import logging
from dataclasses import dataclass
from typing import Optional, Union

from mazecam_lib import constants

log = logging.getLogger("mazecam.config")


@dataclass
class Settings:
    """Typed runtime settings, built from the INI sections."""

    device: Union[int, str] = constants.CAMERA_INDEX
    delay_ms: int = constants.FRAME_DELAY_MS
    canny_low: int = constants.CANNY_LOW
    canny_high: int = constants.CANNY_HIGH
    min_node_size: int = constants.MIN_NODE_SIZE
    density_threshold: float = constants.DEAD_END_DENSITY_THRESHOLD
    intersection_threshold: int = constants.DEAD_END_INTERSECTION_THRESHOLD
    window_name: str = constants.WINDOW_NAME
    headless: bool = False


class ConfigService:
    """Manages reading from and writing to the mazecam.cfg file."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self.defaults = {
            "Capture": {
                "device": str(constants.CAMERA_INDEX),
                "delay_ms": str(constants.FRAME_DELAY_MS),
                "canny_low": str(constants.CANNY_LOW),
                "canny_high": str(constants.CANNY_HIGH),
            },
            "Quadtree": {
                "min_node_size": str(constants.MIN_NODE_SIZE),
            },
            "DeadEnds": {
                "density_threshold": str(constants.DEAD_END_DENSITY_THRESHOLD),
                "intersection_threshold": str(constants.DEAD_END_INTERSECTION_THRESHOLD),
            },
            "Display": {
                "window_name": constants.WINDOW_NAME,
                "headless": "false",
            },
        }

    def get_settings(self) -> dict:
        """Reads settings from the config file, applying defaults if missing."""
        config = configparser.ConfigParser()
        for section, values in self.defaults.items():
            config[section] = values

        if self.config_path and not config.read(self.config_path):
            log.info("Config file not found at %s. Using defaults.", self.config_path)

        return self._config_to_dict(config)

    def save_settings(self, settings: dict):
        """Saves a dictionary of settings to the config file."""
        config = configparser.ConfigParser()
        for section, values in settings.items():
            config[section] = {k: str(v) for k, v in values.items()}

        try:
            with open(self.config_path, "w") as configfile:
                config.write(configfile)
            log.info("Settings successfully saved to %s", self.config_path)
        except IOError as e:
            log.error("Failed to write settings to %s: %s", self.config_path, e)
            raise

    def save_defaults(self):
        self.save_settings(self.defaults)

    def _config_to_dict(self, config: configparser.ConfigParser) -> dict:
        """Converts a ConfigParser object to a nested dictionary."""
        return {s: dict(config.items(s)) for s in config.sections()}


def _parse(raw: dict, section: str, key: str, kind):
    value = raw[section][key]
    try:
        if kind is bool:
            return configparser.ConfigParser.BOOLEAN_STATES[value.strip().lower()]
        return kind(value)
    except (KeyError, ValueError):
        raise ValueError(f"Invalid value for [{section}] {key}: {value!r}") from None


def settings_from_dict(raw: dict) -> Settings:
    """Converts the nested settings dict into a validated Settings object."""
    device = raw["Capture"]["device"].strip()
    settings = Settings(
        device=int(device) if device.isdigit() else device,
        delay_ms=_parse(raw, "Capture", "delay_ms", int),
        canny_low=_parse(raw, "Capture", "canny_low", int),
        canny_high=_parse(raw, "Capture", "canny_high", int),
        min_node_size=_parse(raw, "Quadtree", "min_node_size", int),
        density_threshold=_parse(raw, "DeadEnds", "density_threshold", float),
        intersection_threshold=_parse(raw, "DeadEnds", "intersection_threshold", int),
        window_name=raw["Display"]["window_name"],
        headless=_parse(raw, "Display", "headless", bool),
    )
    validate_settings(settings)
    return settings


def validate_settings(settings: Settings):
    """Rejects values the pipeline cannot run with."""
    if settings.delay_ms < 0:
        raise ValueError("delay_ms must not be negative")
    if settings.min_node_size < 1:
        raise ValueError("min_node_size must be at least 1")
    if not 0 <= settings.canny_low <= settings.canny_high:
        raise ValueError("Canny thresholds must satisfy 0 <= low <= high")
    if not 0.0 <= settings.density_threshold <= 1.0:
        raise ValueError("density_threshold must lie in [0, 1]")
    if settings.intersection_threshold < 0:
        raise ValueError("intersection_threshold must not be negative")


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Loads, merges with defaults and validates the configuration file."""
    return settings_from_dict(ConfigService(config_path).get_settings())
