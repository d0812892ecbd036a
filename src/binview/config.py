"""
User settings stored as JSON in ~/.config/binview.json.

Missing or malformed files and invalid values fall back to the defaults.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .core.encoding import CharEncoding
from .utils.hex_utils import HexFormat

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".config" / "binview.json"
DEFAULT_LOG_FILE = str(Path.home() / ".cache" / "binview" / "binview.log")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Viewer settings; CLI flags override values loaded from the config file."""

    bytes_per_row: int = 16
    addr_radix: int = 16
    encoding: str = CharEncoding.UTF8.value
    hex_format: str = HexFormat.SPACED.value
    log_file: Optional[str] = DEFAULT_LOG_FILE
    log_level: str = "WARNING"

    @property
    def char_encoding(self) -> CharEncoding:
        return CharEncoding.from_name(self.encoding)

    @property
    def hex_text_format(self) -> HexFormat:
        return HexFormat(self.hex_format)


def _valid_bytes_per_row(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 64


def _valid_encoding(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        CharEncoding.from_name(value)
    except ValueError:
        return False
    return True


def _valid_hex_format(value: Any) -> bool:
    return value in {fmt.value for fmt in HexFormat}


VALIDATORS: Dict[str, Callable[[Any], bool]] = {
    'bytes_per_row': _valid_bytes_per_row,
    'addr_radix': lambda value: value in (10, 16) and not isinstance(value, bool),
    'encoding': _valid_encoding,
    'hex_format': _valid_hex_format,
    'log_file': lambda value: value is None or isinstance(value, str),
    'log_level': lambda value: isinstance(value, str) and value.upper() in LOG_LEVELS,
}


def load_config(path: Path = CONFIG_PATH) -> Dict[str, Any]:
    """Load the JSON config object, or {} if it is missing or not an object."""

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not an object", path)
        return {}

    return data


def load_settings(path: Path = CONFIG_PATH) -> Settings:
    """Build Settings from the config file, keeping defaults for invalid keys."""

    data = load_config(path)
    values = {}
    for field in fields(Settings):
        if field.name not in data:
            continue

        value = data[field.name]
        if not VALIDATORS[field.name](value):
            logger.warning("Ignoring invalid config value %s=%r", field.name, value)
            continue

        values[field.name] = value

    return Settings(**values)


def save_settings(settings: Settings, path: Path = CONFIG_PATH) -> bool:
    """Write settings as pretty-printed JSON. Returns False if writing failed."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(asdict(settings), indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        logger.warning("Could not save config %s: %s", path, e)
        return False

    return True
