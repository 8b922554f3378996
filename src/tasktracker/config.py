"""Configuration management for tasktracker."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

TASKTRACKER_HOME = Path(os.environ.get("TASKTRACKER_HOME", Path.home() / ".tasktracker"))
CONFIG_FILE = TASKTRACKER_HOME / "config" / "tasktracker.conf"
DATA_DIR = TASKTRACKER_HOME / "data"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Config:
    """tasktracker configuration."""

    storage_path: Path = field(default_factory=lambda: DATA_DIR / "tasks.json")
    debug: bool = False
    default_priority: int = 2


def _strip_value(value: str) -> str:
    """Unquote a value, or drop an inline comment from an unquoted one."""
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith(('"', "'")):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """
    Load configuration from tasktracker.conf.

    TASKTRACKER_STORAGE in the environment overrides storage_path from the file.
    """
    config = Config()
    config_file = config_file or CONFIG_FILE

    if config_file.exists():
        for line in config_file.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _strip_value(value.strip())

            match key:
                case "storage_path":
                    if value:
                        config.storage_path = Path(value).expanduser()
                case "debug":
                    if value.lower() in TRUE_VALUES:
                        config.debug = True
                    elif value.lower() in FALSE_VALUES:
                        config.debug = False
                    else:
                        logger.warning(f"Ignoring invalid DEBUG value: {value!r}")
                case "default_priority":
                    try:
                        config.default_priority = int(value)
                    except ValueError:
                        logger.warning(f"Ignoring invalid DEFAULT_PRIORITY value: {value!r}")

    env_storage = os.environ.get("TASKTRACKER_STORAGE")
    if env_storage:
        config.storage_path = Path(env_storage).expanduser()

    return config
