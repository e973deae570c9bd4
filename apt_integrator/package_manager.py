"""Thin wrappers around the host's package manager and privileges."""

import logging
import os
import subprocess

from apt_integrator.errors import PackageIndexError, PrivilegeError, exit_status

logger = logging.getLogger(__name__)

UPDATE_COMMAND = ["apt-get", "update", "-qq"]


def require_root() -> None:
    """Ensure the process runs with superuser privileges.

    Raises:
        PrivilegeError: If the effective user id is not 0
    """
    if os.geteuid() != 0:
        raise PrivilegeError("This script must be run as root or via sudo.", exit_code=1)


def update_package_index() -> None:
    """Refresh the package index via ``apt-get update``.

    apt-get prints its own diagnostics to the terminal.

    Raises:
        PackageIndexError: If apt-get is missing or exits non-zero
    """
    logger.info("Updating package lists (this may take a moment)...")
    try:
        subprocess.run(UPDATE_COMMAND, check=True)
    except FileNotFoundError as e:
        raise PackageIndexError(f"apt-get is not available: {e}", exit_code=127) from e
    except subprocess.CalledProcessError as e:
        raise PackageIndexError(
            f"{' '.join(UPDATE_COMMAND)} exited with status {e.returncode}",
            exit_code=exit_status(e.returncode),
        ) from e
    logger.info("APT update complete.")
