"""Reporters for third-party legal disclaimers.

Disclaimers work on the raw provider output: no sorting, no ignore
filtering and no license grouping. Private packages are left out and
license texts are trimmed.
"""

import json
from collections.abc import Iterable
from importlib.resources import files
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, Template

from license_lister.models import DisclaimerEntry, PackageManifest
from license_lister.reporters.base import BaseReporter


def build_entries(manifests: Iterable[PackageManifest]) -> list[DisclaimerEntry]:
    """Build disclaimer entries for every non-private manifest.

    Args:
        manifests: Manifests in provider order.

    Returns:
        Entries in the same order, one per non-private manifest.
    """
    entries = []
    for manifest in manifests:
        if manifest.private:
            continue
        entries.append(
            DisclaimerEntry(
                name=manifest.name,
                version=manifest.version,
                license_text=(
                    manifest.license_text.strip() if manifest.license_text else None
                ),
                license=manifest.license,
                homepage=manifest.homepage,
            )
        )
    return entries


def group_by_license_text(
    entries: Iterable[DisclaimerEntry],
) -> list[tuple[str, list[DisclaimerEntry]]]:
    """Group entries sharing an identical license text.

    Entries without a license text are not included.

    Returns:
        ``(license_text, entries)`` pairs in first-seen order.
    """
    sections: dict[str, list[DisclaimerEntry]] = {}
    for entry in entries:
        if entry.license_text:
            sections.setdefault(entry.license_text, []).append(entry)
    return list(sections.items())


class DisclaimerReporter(BaseReporter):
    """Reporter that serializes disclaimer entries as one JSON array."""

    def render(self, entries: list[DisclaimerEntry]) -> str:
        return json.dumps(
            [entry.to_dict() for entry in entries],
            separators=(",", ":"),
            ensure_ascii=False,
        )

    @property
    def format_name(self) -> str:
        return "json"

    @property
    def default_extension(self) -> str:
        return ".json"


class NoticeReporter(BaseReporter):
    """Reporter that renders disclaimer entries as a plain-text notice.

    Packages sharing a license text are listed together above a single copy
    of that text. Packages without a license text are listed at the end with
    their declared license.

    Attributes:
        template: The Jinja2 template to use for rendering.
    """

    def __init__(self, template_path: Optional[Path] = None) -> None:
        """Initialize the notice reporter.

        Args:
            template_path: Optional path to a custom Jinja2 template.
                If not provided, uses the bundled template.
        """
        if template_path:
            env = Environment(
                loader=FileSystemLoader(template_path.parent),
                autoescape=False,
                keep_trailing_newline=True,
            )
            self.template = env.get_template(template_path.name)
        else:
            self.template = self._load_default_template()

    def _load_default_template(self) -> Template:
        template_content = (
            files("license_lister.templates")
            .joinpath("notice.txt.j2")
            .read_text(encoding="utf-8")
        )
        env = Environment(autoescape=False, keep_trailing_newline=True)
        return env.from_string(template_content)

    def render(self, entries: list[DisclaimerEntry]) -> str:
        return self.template.render(
            sections=group_by_license_text(entries),
            without_text=[entry for entry in entries if not entry.license_text],
        )

    @property
    def format_name(self) -> str:
        return "text"

    @property
    def default_extension(self) -> str:
        return ".txt"
