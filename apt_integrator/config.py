"""Configuration and logging setup for the APT repository integrator."""

import logging
import os
import sys

INFO_PREFIX = "→"


class _BelowWarningFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def setup_logging(level: str | None = None) -> None:
    """Set up terminal logging.

    Informational records go to stdout prefixed with an arrow, warnings and
    errors go to stderr prefixed with their level name.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO.
    """
    log_level = level or os.getenv(ENV_LOG_LEVEL, "INFO")

    info_handler = logging.StreamHandler(sys.stdout)
    info_handler.addFilter(_BelowWarningFilter())
    info_handler.setFormatter(logging.Formatter(f"{INFO_PREFIX} %(message)s"))

    error_handler = logging.StreamHandler(sys.stderr)
    error_handler.setLevel(logging.WARNING)
    error_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        handlers=[info_handler, error_handler],
        force=True,
    )

    # Set urllib3 logging to WARNING to reduce noise
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_env_var(name: str, default: str | None = None, required: bool = False) -> str:
    """Get environment variable with optional default and validation.

    Args:
        name: Environment variable name
        default: Default value if not set
        required: Whether the variable is required

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set
    """
    value = os.getenv(name, default)

    if required and not value:
        raise ValueError(f"Required environment variable {name} is not set")

    return value or ""


# Environment variable names
ENV_CONFIG_FILE = "APT_INTEGRATOR_CONFIG"
ENV_LOG_LEVEL = "LOG_LEVEL"

# Compiled-in defaults
TOOL_NAME = "integrate-kali-repo"
REPO_LABEL = "Kali Rolling"
REPO_URL = "http://http.kali.org/kali"
REPO_DISTRIBUTION = "kali-rolling"
REPO_COMPONENTS = ("main", "non-free", "contrib")
PIN_PRIORITY = 50

KEY_URL = "https://archive.kali.org/archive-key.asc"
KEY_DOWNLOAD_TIMEOUT = 30
KEY_IMPORT_MODE = "apt-key"

APT_DIR = "/etc/apt"
SOURCES_LIST_FILE = "/etc/apt/sources.list.d/kali.list"
PREFERENCES_FILE = "/etc/apt/preferences.d/kali.pref"
BACKUP_ROOT = "/etc/apt/backups"
KEY_FILE = "/tmp/kali-archive-key.asc"
KEYRING_FILE = "/etc/apt/trusted.gpg.d/kali-archive-keyring.gpg"

# Same layout as `date +%F_%T`
BACKUP_TIMESTAMP_FORMAT = "%Y-%m-%d_%H:%M:%S"
