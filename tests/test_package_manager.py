"""Tests for privilege checks and the package index refresh."""

import subprocess
from unittest.mock import patch

import pytest

from apt_integrator.errors import PackageIndexError, PrivilegeError, exit_status
from apt_integrator.package_manager import require_root, update_package_index


class TestRequireRoot:
    def test_root_passes(self):
        with patch("apt_integrator.package_manager.os.geteuid", return_value=0):
            require_root()

    def test_non_root_fails_with_status_1(self):
        with patch("apt_integrator.package_manager.os.geteuid", return_value=1000):
            with pytest.raises(PrivilegeError) as excinfo:
                require_root()
        assert excinfo.value.exit_code == 1
        assert "must be run as root" in excinfo.value.message


class TestUpdatePackageIndex:
    def test_runs_apt_get_update_quietly(self):
        with patch("apt_integrator.package_manager.subprocess.run") as run:
            update_package_index()
        run.assert_called_once_with(["apt-get", "update", "-qq"], check=True)

    def test_failure_propagates_exit_status(self):
        error = subprocess.CalledProcessError(100, ["apt-get", "update", "-qq"])
        with patch("apt_integrator.package_manager.subprocess.run", side_effect=error):
            with pytest.raises(PackageIndexError) as excinfo:
                update_package_index()
        assert excinfo.value.exit_code == 100

    def test_missing_apt_get(self):
        with patch(
            "apt_integrator.package_manager.subprocess.run",
            side_effect=FileNotFoundError("apt-get"),
        ):
            with pytest.raises(PackageIndexError) as excinfo:
                update_package_index()
        assert excinfo.value.exit_code == 127

    def test_killed_by_signal_maps_to_shell_status(self):
        error = subprocess.CalledProcessError(-15, ["apt-get", "update", "-qq"])
        with patch("apt_integrator.package_manager.subprocess.run", side_effect=error):
            with pytest.raises(PackageIndexError) as excinfo:
                update_package_index()
        assert excinfo.value.exit_code == 143


class TestExitStatus:
    @pytest.mark.parametrize("returncode, expected", [(1, 1), (100, 100), (-2, 130), (-9, 137)])
    def test_mapping(self, returncode, expected):
        assert exit_status(returncode) == expected
