"""Provider for installed ``node_modules`` trees.

Walks an installed modules folder, reads every package's ``package.json``
and license file, and attaches a reference whose ``ignore`` flag marks
packages built for another platform.
"""

import asyncio
import json
import logging
import platform
import re
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from license_lister.models import PackageManifest, PackageReference
from license_lister.providers.base import ManifestProvider, ProviderFlags

logger = logging.getLogger(__name__)

_LICENSE_FILE_RE = re.compile(r"^(?:licen[sc]e|copying)(?:[.\-].*)?$", re.IGNORECASE)

_CPU_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "armv7l": "arm",
    "armv6l": "arm",
}


def current_os() -> str:
    """Return the running OS in ``package.json`` ``os`` field terms."""
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


def current_cpu() -> str:
    """Return the running CPU in ``package.json`` ``cpu`` field terms."""
    machine = platform.machine()
    return _CPU_ALIASES.get(machine.lower(), machine.lower())


def is_platform_allowed(allowed: Any, actual: str) -> bool:
    """Check an ``os``/``cpu`` field against the running platform.

    Entries prefixed with ``!`` exclude a platform; any other entry whitelists
    one. A missing or empty field allows every platform.

    Args:
        allowed: The raw field value from the manifest.
        actual: The running platform identifier.

    Returns:
        True if the package may be used on ``actual``.
    """
    if isinstance(allowed, str):
        allowed = [allowed]
    if not isinstance(allowed, list):
        return True
    allowed = [entry for entry in allowed if isinstance(entry, str)]
    if not allowed:
        return True

    blocked = {entry[1:] for entry in allowed if entry.startswith("!")}
    if actual in blocked:
        return False

    whitelist = [entry for entry in allowed if not entry.startswith("!")]
    return not whitelist or actual in whitelist


class NodeModulesProvider(ManifestProvider):
    """Provider for an installed modules folder.

    Accepts either a project directory (the modules folder is looked up
    beneath it) or the modules folder itself. Scoped packages (``@scope/x``)
    and nested modules folders are walked too. Directory entries are visited
    in sorted order so the result does not depend on the file system.
    """

    @classmethod
    def can_handle(cls, path: Path) -> bool:
        return path.is_dir()

    @property
    def source_name(self) -> str:
        return "node_modules"

    async def get_manifests(
        self, flags: Optional[ProviderFlags] = None
    ) -> list[PackageManifest]:
        """Read every installed package below the modules folder.

        Raises:
            FileNotFoundError: If neither the path nor its modules folder exist.
        """
        flags = flags or ProviderFlags()
        source = self._require_source()

        if source.name == flags.modules_folder:
            modules_dir = source
        else:
            modules_dir = source / flags.modules_folder

        if not modules_dir.is_dir():
            raise FileNotFoundError(
                f"No {flags.modules_folder} folder found in {source}. "
                f"Install dependencies first."
            )

        manifests = await asyncio.to_thread(self._walk, modules_dir, flags)
        logger.debug("Found %d installed packages in %s", len(manifests), modules_dir)
        return manifests

    def _walk(self, modules_dir: Path, flags: ProviderFlags) -> list[PackageManifest]:
        manifests: list[PackageManifest] = []

        for package_dir in self._package_dirs(modules_dir):
            manifest = self._read_package(package_dir, flags)
            if manifest is not None:
                manifests.append(manifest)

            nested = package_dir / flags.modules_folder
            if nested.is_dir():
                manifests.extend(self._walk(nested, flags))

        return manifests

    def _package_dirs(self, modules_dir: Path) -> list[Path]:
        dirs: list[Path] = []
        for entry in sorted(modules_dir.iterdir()):
            if entry.name.startswith(".") or not entry.is_dir():
                continue
            if entry.name.startswith("@"):
                dirs.extend(
                    child for child in sorted(entry.iterdir()) if child.is_dir()
                )
            else:
                dirs.append(entry)
        return dirs

    def _read_package(
        self, package_dir: Path, flags: ProviderFlags
    ) -> Optional[PackageManifest]:
        manifest_path = package_dir / "package.json"
        if not manifest_path.is_file():
            logger.debug("Skipping %s: no package.json", package_dir)
            return None

        try:
            with open(manifest_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Skipping unreadable manifest %s: %s", manifest_path, e)
            return None

        if not isinstance(data, Mapping):
            logger.warning("Skipping %s: manifest is not an object", manifest_path)
            return None

        if "licenseText" not in data:
            license_text = self._read_license_text(package_dir)
            if license_text is not None:
                data = {**data, "licenseText": license_text}

        ignore = not flags.ignore_platform and not (
            is_platform_allowed(data.get("os"), current_os())
            and is_platform_allowed(data.get("cpu"), current_cpu())
        )
        if ignore:
            logger.debug("Ignoring %s: not built for this platform", package_dir.name)

        return PackageManifest.from_dict(data, reference=PackageReference(ignore=ignore))

    def _read_license_text(self, package_dir: Path) -> Optional[str]:
        for entry in sorted(package_dir.iterdir()):
            if entry.is_file() and _LICENSE_FILE_RE.match(entry.name):
                try:
                    return entry.read_text(encoding="utf-8", errors="replace")
                except OSError as e:
                    logger.warning("Could not read license file %s: %s", entry, e)
                    return None
        return None
