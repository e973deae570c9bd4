"""Rendering and writing of APT source-list and preferences files."""

import logging
from pathlib import Path

from apt_integrator.models import PinPolicy, RepositoryDescriptor

logger = logging.getLogger(__name__)


def render_source_list(descriptor: RepositoryDescriptor, label: str, tool_name: str) -> str:
    """Render the Source List File for a repository.

    The document is a management comment followed by the binary and the
    source entry, one per line.

    Args:
        descriptor: Repository to declare
        label: Human-readable repository name for the comment
        tool_name: Name of the tool managing the file

    Returns:
        File content with a trailing newline
    """
    lines = [
        f"# {label} repository (managed by {tool_name})",
        descriptor.binary_entry,
        descriptor.source_entry,
    ]
    return "\n".join(lines) + "\n"


def render_pin_policy(policy: PinPolicy) -> str:
    """Render one APT preferences stanza."""
    lines = []
    if policy.comment:
        lines.append(f"# {policy.comment}")
    lines += [
        f"Package: {policy.package}",
        f"Pin: release a={policy.release}",
        f"Pin-Priority: {policy.priority}",
    ]
    return "\n".join(lines) + "\n"


def write_config_file(path: Path, content: str) -> None:
    """Overwrite ``path`` with ``content``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.debug(f"Wrote {len(content)} bytes to {path}")
