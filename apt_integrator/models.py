"""Data models for the APT repository integrator."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class RepositoryDescriptor:
    """A secondary APT repository: base URL, distribution and components."""

    base_url: str
    distribution: str
    components: tuple[str, ...]

    def _entry(self, kind: str) -> str:
        return " ".join([kind, self.base_url, self.distribution, *self.components])

    @property
    def binary_entry(self) -> str:
        """One-line ``deb`` declaration."""
        return self._entry("deb")

    @property
    def source_entry(self) -> str:
        """One-line ``deb-src`` declaration."""
        return self._entry("deb-src")


@dataclass(frozen=True)
class PinPolicy:
    """A single APT preferences stanza pinning one release."""

    release: str
    priority: int
    package: str = "*"
    comment: str | None = None


@dataclass(frozen=True)
class IntegrationPaths:
    """Filesystem locations touched by an integration run.

    Attributes:
        apt_dir: APT configuration root, source of the backed up files
        sources_list_file: Source List File written for the repository
        preferences_file: Pin Policy File written for the repository
        backup_root: Directory holding one timestamped backup per run
        key_file: Temporary location of the downloaded signing key
        keyring_file: Keyring written when importing in ``keyring`` mode
    """

    apt_dir: Path
    sources_list_file: Path
    preferences_file: Path
    backup_root: Path
    key_file: Path
    keyring_file: Path


@dataclass
class StepResult:
    """Outcome of one pipeline step."""

    step: str
    success: bool
    reason: str = ""
    exit_code: int = 0


@dataclass
class IntegrationResult:
    """Outcome of a full integration run."""

    steps: list[StepResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(step.success for step in self.steps)

    @property
    def failed_step(self) -> StepResult | None:
        for step in self.steps:
            if not step.success:
                return step
        return None

    @property
    def exit_code(self) -> int:
        failed = self.failed_step
        return failed.exit_code if failed else 0
