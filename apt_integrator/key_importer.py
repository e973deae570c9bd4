"""Download of a repository signing key and registration with APT."""

import logging
import subprocess
from pathlib import Path

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from apt_integrator.errors import KeyDownloadError, KeyImportError, exit_status

logger = logging.getLogger(__name__)


class KeyImporter:
    """Fetches an archive key over HTTPS and adds it to APT's trust store."""

    def __init__(
        self,
        key_url: str,
        key_file: Path,
        import_mode: str = "apt-key",
        keyring_file: Path | None = None,
        timeout: int = 30,
        max_retries: int = 0,
    ):
        """Initialize the key importer.

        Args:
            key_url: HTTPS URL of the ASCII-armored key
            key_file: Temporary location the key is downloaded to
            import_mode: "apt-key" to use ``apt-key add``, "keyring" to write
                a dearmored keyring file with gpg
            keyring_file: Target keyring for "keyring" mode
            timeout: Request timeout in seconds
            max_retries: Retry attempts for the download (single attempt by default)
        """
        self.key_url = key_url
        self.key_file = Path(key_file)
        self.import_mode = import_mode
        self.keyring_file = Path(keyring_file) if keyring_file else None
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with the configured retry policy."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("https://", adapter)

        return session

    def download_key(self) -> Path:
        """Download the key material into the temporary key file.

        Returns:
            Path to the downloaded key

        Raises:
            KeyDownloadError: On network, TLS or HTTP errors, timeouts or an
                empty response
        """
        logger.info("Downloading archive key...")
        logger.debug(f"Fetching {self.key_url}")

        try:
            response = self.session.get(self.key_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise KeyDownloadError(f"Failed to download key from {self.key_url}: {e}") from e

        if not response.content:
            raise KeyDownloadError(f"Empty key received from {self.key_url}")

        self.key_file.parent.mkdir(parents=True, exist_ok=True)
        self.key_file.write_bytes(response.content)
        logger.debug(f"Saved {len(response.content)} bytes to {self.key_file}")
        return self.key_file

    def registration_command(self) -> list[str]:
        """Command that hands the downloaded key to the trust store."""
        if self.import_mode == "keyring":
            if self.keyring_file is None:
                raise KeyImportError("No keyring file configured for keyring import")
            return [
                "gpg", "--batch", "--yes", "--dearmor",
                "-o", str(self.keyring_file), str(self.key_file),
            ]
        return ["apt-key", "add", str(self.key_file)]

    def register_key(self) -> None:
        """Add the downloaded key to APT's trust store.

        Raises:
            KeyImportError: If the registration command is missing or fails
        """
        cmd = self.registration_command()
        logger.info("Adding archive key to apt keyring")
        if self.keyring_file is not None and self.import_mode == "keyring":
            self.keyring_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            subprocess.run(cmd, capture_output=True, check=True)
        except FileNotFoundError as e:
            raise KeyImportError(f"{cmd[0]} is not available: {e}", exit_code=127) from e
        except subprocess.CalledProcessError as e:
            logger.debug(f"{' '.join(cmd)} stderr: {e.stderr.decode(errors='replace')}")
            raise KeyImportError(
                f"{' '.join(cmd)} exited with status {e.returncode}",
                exit_code=exit_status(e.returncode),
            ) from e

    def import_key(self) -> None:
        """Download the key and register it, then delete the temporary file.

        The temporary file is removed whether or not registration succeeds.
        """
        self.download_key()
        try:
            self.register_key()
        finally:
            self.key_file.unlink(missing_ok=True)
            logger.debug(f"Removed {self.key_file}")
