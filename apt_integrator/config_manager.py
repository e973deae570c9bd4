"""Configuration management for the APT repository integrator."""

from dataclasses import dataclass, replace
from pathlib import Path

import yaml

from apt_integrator import config
from apt_integrator.errors import ConfigError
from apt_integrator.models import IntegrationPaths, PinPolicy, RepositoryDescriptor

KEY_IMPORT_MODES = ("apt-key", "keyring")


@dataclass(frozen=True)
class IntegratorConfig:
    """Everything an integration run needs.

    Attributes:
        label: Human-readable repository name used in comments and messages
        repository: Repository entries written to the Source List File
        pin_priority: Pin-Priority given to every package of the repository
        key_url: HTTPS URL of the repository signing key
        key_import_mode: "apt-key" or "keyring"
        key_timeout: Key download timeout in seconds
        paths: Filesystem locations touched by the run
    """

    label: str
    repository: RepositoryDescriptor
    pin_priority: int
    key_url: str
    key_import_mode: str
    key_timeout: int
    paths: IntegrationPaths

    @property
    def pin_policy(self) -> PinPolicy:
        return PinPolicy(
            release=self.repository.distribution,
            priority=self.pin_priority,
            comment=f"Lower priority for all {self.label} packages",
        )

    @classmethod
    def defaults(cls) -> "IntegratorConfig":
        """Build the compiled-in configuration."""
        return cls(
            label=config.REPO_LABEL,
            repository=RepositoryDescriptor(
                base_url=config.REPO_URL,
                distribution=config.REPO_DISTRIBUTION,
                components=config.REPO_COMPONENTS,
            ),
            pin_priority=config.PIN_PRIORITY,
            key_url=config.KEY_URL,
            key_import_mode=config.KEY_IMPORT_MODE,
            key_timeout=config.KEY_DOWNLOAD_TIMEOUT,
            paths=IntegrationPaths(
                apt_dir=Path(config.APT_DIR),
                sources_list_file=Path(config.SOURCES_LIST_FILE),
                preferences_file=Path(config.PREFERENCES_FILE),
                backup_root=Path(config.BACKUP_ROOT),
                key_file=Path(config.KEY_FILE),
                keyring_file=Path(config.KEYRING_FILE),
            ),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "IntegratorConfig":
        """Load configuration overrides from a YAML file.

        Keys absent from the file keep their compiled-in defaults.

        Args:
            yaml_path: Path to the YAML configuration file

        Returns:
            IntegratorConfig with the overrides applied

        Raises:
            ConfigError: If the file cannot be read, is not valid YAML or
                holds invalid values
        """
        try:
            with open(yaml_path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot load configuration {yaml_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration {yaml_path} must be a mapping")

        base = cls.defaults()
        repo_data = _section(data, "repository", yaml_path)
        key_data = _section(data, "key", yaml_path)
        paths_data = _section(data, "paths", yaml_path)

        components = repo_data.get("components", base.repository.components)
        if isinstance(components, str):
            components = components.split()
        if not isinstance(components, (list, tuple)):
            raise ConfigError(f"Repository components must be a list: {components!r}")

        unknown = set(paths_data) - set(IntegrationPaths.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown paths in {yaml_path}: {sorted(unknown)}")
        for name, value in paths_data.items():
            if not isinstance(value, str) or not value:
                raise ConfigError(f"Path {name} must be a non-empty string: {value!r}")
        paths = replace(
            base.paths, **{name: Path(value) for name, value in paths_data.items()}
        )

        loaded = cls(
            label=repo_data.get("label", base.label),
            repository=RepositoryDescriptor(
                base_url=repo_data.get("url", base.repository.base_url),
                distribution=repo_data.get(
                    "distribution", base.repository.distribution
                ),
                components=tuple(components),
            ),
            pin_priority=data.get("pin_priority", base.pin_priority),
            key_url=key_data.get("url", base.key_url),
            key_import_mode=key_data.get("import_mode", base.key_import_mode),
            key_timeout=key_data.get("timeout", base.key_timeout),
            paths=paths,
        )
        loaded.validate()
        return loaded

    def validate(self) -> None:
        """Reject values APT or the download step cannot work with.

        Raises:
            ConfigError: On the first invalid value
        """
        for name, value in (
            ("label", self.label),
            ("url", self.repository.base_url),
            ("distribution", self.repository.distribution),
        ):
            if not _is_text(value):
                raise ConfigError(f"Repository {name} must be a non-empty string: {value!r}")
        if not self.repository.components:
            raise ConfigError("Repository needs at least one component")
        for component in self.repository.components:
            if not _is_text(component) or len(component.split()) != 1:
                raise ConfigError(f"Invalid repository component: {component!r}")
        if not isinstance(self.pin_priority, int) or isinstance(
            self.pin_priority, bool
        ):
            raise ConfigError(f"Invalid pin priority: {self.pin_priority!r}")
        if not _is_text(self.key_url) or not self.key_url.startswith("https://"):
            raise ConfigError(f"Signing key must be fetched over HTTPS: {self.key_url!r}")
        if not _is_text(self.key_import_mode) or self.key_import_mode not in KEY_IMPORT_MODES:
            raise ConfigError(
                f"Unknown key import mode {self.key_import_mode!r}, "
                f"expected one of {', '.join(KEY_IMPORT_MODES)}"
            )
        if (
            not isinstance(self.key_timeout, int)
            or isinstance(self.key_timeout, bool)
            or self.key_timeout <= 0
        ):
            raise ConfigError(f"Invalid key download timeout: {self.key_timeout!r}")


def _is_text(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _section(data: dict, name: str, yaml_path: Path) -> dict:
    """Return the mapping stored under ``name``, empty when unset."""
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section {name!r} in {yaml_path} must be a mapping")
    return section


class ConfigManager:
    """Resolves the configuration used for a run.

    Attributes:
        config_path: Optional YAML override file
    """

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize ConfigManager.

        Args:
            config_path: YAML override file. If None, uses the
                APT_INTEGRATOR_CONFIG environment variable when set.
        """
        path = config_path or config.get_env_var(config.ENV_CONFIG_FILE)
        self.config_path = Path(path) if path else None

    def load(self) -> IntegratorConfig:
        """Return the compiled-in configuration, with overrides if configured.

        Raises:
            ConfigError: If the override file is missing or invalid
        """
        if self.config_path is None:
            return IntegratorConfig.defaults()
        return IntegratorConfig.from_yaml(self.config_path)
