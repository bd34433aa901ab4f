import json
import logging
import os
from pathlib import Path

from ..validation import (
    ScannerConfigError,
    parse_int_setting,
    validate_barcode_length,
    validate_input_delay,
)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SCANNER_FIELD_CONFIG"


def default_config():
    return {
        "barcode_scanner": {
            "barcode_length": 8,
            "input_delay": 50,
            "device_path": None
        }
    }


def get_config_path():
    """Get the path to the config.json file"""
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path and env_path.strip():
        return Path(env_path.strip())
    return Path.cwd() / 'config.json'


def validate_config(config):
    """Validate scanner settings in place and return the config"""
    scanner = config["barcode_scanner"]
    scanner["barcode_length"] = validate_barcode_length(
        parse_int_setting("barcode_length", scanner["barcode_length"]))
    scanner["input_delay"] = validate_input_delay(
        parse_int_setting("input_delay", scanner["input_delay"]))
    return config


def save_config(config, path=None):
    """Save configuration to config.json file, keeping a backup of the previous one"""
    config_path = Path(path) if path else get_config_path()

    if config_path.exists():
        backup_path = config_path.with_suffix('.json.bak')
        try:
            with open(config_path, 'r') as src, open(backup_path, 'w') as dst:
                dst.write(src.read())
            logger.debug(f"Backup created at: {backup_path}")
        except OSError as e:
            logger.warning(f"Failed to create backup: {e}")

    with open(config_path, 'w') as f:
        json.dump(config, f, indent=2)
    logger.info(f"Configuration saved to: {config_path}")
    return config_path


def load_config(path=None):
    """
    Load configuration from config file first, then override with environment variables if present.

    Raises:
        ScannerConfigError: If the file cannot be parsed or a setting is invalid
    """
    config = default_config()
    config_path = Path(path) if path else get_config_path()

    if config_path.exists():
        logger.debug(f"Loading config from: {config_path}")
        try:
            with open(config_path, 'r') as f:
                file_config = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Error reading config file {config_path}: {e}")
            raise ScannerConfigError(f"Invalid JSON in {config_path}: {e}") from e

        if not isinstance(file_config, dict):
            raise ScannerConfigError(f"Config file {config_path} must contain a JSON object")
        if "barcode_scanner" in file_config:
            config["barcode_scanner"].update(file_config["barcode_scanner"])
    elif path:
        # An explicitly requested file must exist
        raise ScannerConfigError(f"Config file not found at: {config_path}")
    else:
        logger.debug(f"Config file not found at: {config_path}, using defaults")

    # Override with environment variables if they exist
    env_length = os.getenv("SCANNER_BARCODE_LENGTH")
    if env_length and env_length.strip():
        config["barcode_scanner"]["barcode_length"] = env_length

    env_delay = os.getenv("SCANNER_INPUT_DELAY")
    if env_delay and env_delay.strip():
        config["barcode_scanner"]["input_delay"] = env_delay

    env_device = os.getenv("SCANNER_DEVICE_PATH")
    if env_device and env_device.strip():
        config["barcode_scanner"]["device_path"] = env_device.strip()

    return validate_config(config)
