"""Main entry point for the APT repository integrator."""

import logging
import sys

from apt_integrator.config import setup_logging
from apt_integrator.config_manager import ConfigManager
from apt_integrator.errors import ConfigError
from apt_integrator.integrator import RepositoryIntegrator

logger = logging.getLogger(__name__)


def run() -> int:
    """Load configuration and integrate the repository.

    Returns:
        Process exit status: 0 on success, 1 when not running as root or
        the configuration is invalid, otherwise the failing step's status
    """
    try:
        config = ConfigManager().load()
    except ConfigError as e:
        logger.error(e.message)
        return e.exit_code

    result = RepositoryIntegrator(config).integrate()
    return result.exit_code


def main() -> None:
    """Console entry point."""
    setup_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
