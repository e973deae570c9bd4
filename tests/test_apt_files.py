"""Unit tests for apt_integrator/apt_files.py."""

from apt_integrator.apt_files import render_pin_policy, render_source_list, write_config_file
from apt_integrator.config_manager import IntegratorConfig
from apt_integrator.models import PinPolicy, RepositoryDescriptor

KALI = RepositoryDescriptor(
    base_url="http://http.kali.org/kali",
    distribution="kali-rolling",
    components=("main", "non-free", "contrib"),
)


class TestRenderSourceList:
    def test_kali_entries(self):
        content = render_source_list(KALI, "Kali Rolling", "integrate-kali-repo")
        assert content == (
            "# Kali Rolling repository (managed by integrate-kali-repo)\n"
            "deb http://http.kali.org/kali kali-rolling main non-free contrib\n"
            "deb-src http://http.kali.org/kali kali-rolling main non-free contrib\n"
        )

    def test_exactly_three_lines(self):
        content = render_source_list(KALI, "Kali Rolling", "tool")
        assert len(content.splitlines()) == 3

    def test_single_component(self):
        descriptor = RepositoryDescriptor("https://deb.example.org/x", "stable", ("main",))
        lines = render_source_list(descriptor, "Example", "tool").splitlines()
        assert lines[1] == "deb https://deb.example.org/x stable main"
        assert lines[2] == "deb-src https://deb.example.org/x stable main"

    def test_defaults_render_kali(self):
        config = IntegratorConfig.defaults()
        content = render_source_list(config.repository, config.label, "integrate-kali-repo")
        assert "deb http://http.kali.org/kali kali-rolling main non-free contrib\n" in content


class TestRenderPinPolicy:
    def test_default_policy(self):
        content = render_pin_policy(IntegratorConfig.defaults().pin_policy)
        assert content == (
            "# Lower priority for all Kali Rolling packages\n"
            "Package: *\n"
            "Pin: release a=kali-rolling\n"
            "Pin-Priority: 50\n"
        )

    def test_without_comment(self):
        content = render_pin_policy(PinPolicy(release="sid", priority=100))
        assert content == "Package: *\nPin: release a=sid\nPin-Priority: 100\n"


class TestWriteConfigFile:
    def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / "sources.list.d" / "kali.list"
        write_config_file(target, "deb x y z\n")
        assert target.read_text() == "deb x y z\n"

    def test_overwrites_previous_content(self, tmp_path):
        target = tmp_path / "kali.list"
        target.write_text("deb http://old.example.org custom main\n# local edit\n")
        write_config_file(target, "new\n")
        assert target.read_text() == "new\n"
