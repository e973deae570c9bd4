"""Exceptions raised by the integration steps."""


class IntegrationError(Exception):
    """Base class of the errors that abort an integration run.

    Attributes:
        exit_code: Process exit status reported when this error stops the run
    """

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code or 1

    @property
    def message(self) -> str:
        return self.args[0]


class PrivilegeError(IntegrationError):
    """Raised when the process is not running as the superuser."""


class ConfigError(IntegrationError):
    """Raised when the integrator configuration cannot be loaded."""


class KeyDownloadError(IntegrationError):
    """Raised when the repository signing key cannot be fetched."""


class KeyImportError(IntegrationError):
    """Raised when the signing key cannot be added to the trust store."""


class PackageIndexError(IntegrationError):
    """Raised when the package index refresh fails."""


def exit_status(returncode: int) -> int:
    """Map a subprocess return code to a shell-style exit status.

    A child killed by signal N reports ``-N``; shells report ``128 + N``.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode
