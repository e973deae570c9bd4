"""Integration pipeline registering a secondary APT repository."""

import logging
from collections.abc import Callable

from apt_integrator import package_manager
from apt_integrator.apt_files import render_pin_policy, render_source_list, write_config_file
from apt_integrator.backup import ConfigBackup
from apt_integrator.config import TOOL_NAME
from apt_integrator.config_manager import IntegratorConfig
from apt_integrator.errors import IntegrationError
from apt_integrator.key_importer import KeyImporter
from apt_integrator.models import IntegrationResult, StepResult

logger = logging.getLogger(__name__)


class RepositoryIntegrator:
    """Runs the integration steps in order and stops at the first failure."""

    def __init__(
        self,
        config: IntegratorConfig,
        key_importer: KeyImporter | None = None,
        backup: ConfigBackup | None = None,
    ):
        """Initialize the integrator.

        Args:
            config: Repository, key and path settings for the run
            key_importer: Importer to use instead of one built from config
            backup: Backup to use instead of one built from config
        """
        self.config = config
        paths = config.paths
        self.key_importer = key_importer or KeyImporter(
            key_url=config.key_url,
            key_file=paths.key_file,
            import_mode=config.key_import_mode,
            keyring_file=paths.keyring_file,
            timeout=config.key_timeout,
        )
        self.backup = backup or ConfigBackup(paths.apt_dir, paths.backup_root)

    def steps(self) -> list[tuple[str, Callable[[], None]]]:
        return [
            ("privilege_check", self.check_privileges),
            ("config_backup", self.backup_configs),
            ("repository_registration", self.add_repository),
            ("key_import", self.import_key),
            ("pin_policy", self.create_pinning),
            ("index_refresh", self.update_packages),
        ]

    def check_privileges(self) -> None:
        package_manager.require_root()

    def backup_configs(self) -> None:
        self.backup.backup()

    def add_repository(self) -> None:
        path = self.config.paths.sources_list_file
        logger.info(f"Writing {self.config.label} repository entries to {path}")
        content = render_source_list(self.config.repository, self.config.label, TOOL_NAME)
        write_config_file(path, content)

    def import_key(self) -> None:
        self.key_importer.import_key()

    def create_pinning(self) -> None:
        path = self.config.paths.preferences_file
        logger.info(f"Creating pinning file {path}")
        write_config_file(path, render_pin_policy(self.config.pin_policy))

    def update_packages(self) -> None:
        package_manager.update_package_index()

    def run_step(self, name: str, step: Callable[[], None]) -> StepResult:
        """Run one step and turn its failure into a StepResult."""
        try:
            step()
        except IntegrationError as e:
            logger.error(e.message)
            return StepResult(step=name, success=False, reason=e.message, exit_code=e.exit_code)
        except OSError as e:
            logger.error(str(e))
            return StepResult(step=name, success=False, reason=str(e), exit_code=1)
        return StepResult(step=name, success=True)

    def integrate(self) -> IntegrationResult:
        """Run every step in order, stopping at the first failure.

        Side effects of the steps completed before a failure are kept.

        Returns:
            IntegrationResult listing the steps that ran
        """
        result = IntegrationResult()
        for name, step in self.steps():
            step_result = self.run_step(name, step)
            result.steps.append(step_result)
            if not step_result.success:
                logger.error(f"Step {name} failed, aborting")
                return result

        distribution = self.config.repository.distribution
        logger.info(f"{self.config.label} repositories integrated successfully.")
        logger.info(
            f"To install a package from {self.config.label}, use: "
            f"apt-get install -t {distribution} <package>"
        )
        return result
