"""Provider for pre-resolved manifest dumps.

Reads a JSON array of ``package.json``-shaped records that another resolver
already produced. Each record may carry a ``_reference`` object whose
``ignore`` flag is honored by the aggregator.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from license_lister.models import PackageManifest
from license_lister.providers.base import ManifestProvider, ProviderFlags

logger = logging.getLogger(__name__)


class ManifestFileProvider(ManifestProvider):
    """Provider for JSON manifest dumps.

    Example file::

        [
            {"name": "left-pad", "version": "1.3.0", "license": "WTFPL",
             "_reference": {"ignore": false}}
        ]
    """

    @classmethod
    def can_handle(cls, path: Path) -> bool:
        """Check if this provider can handle the given file.

        Returns:
            True for existing files with a ``.json`` suffix.
        """
        return path.suffix == ".json" and path.is_file()

    @property
    def source_name(self) -> str:
        return "manifest dump"

    async def get_manifests(
        self, flags: Optional[ProviderFlags] = None
    ) -> list[PackageManifest]:
        """Read manifests from the dump file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not a JSON array of objects.
        """
        source = self._require_source()

        try:
            with open(source, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {source}: {e}") from e

        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array of manifests in {source}")

        manifests = []
        for index, record in enumerate(data):
            if not isinstance(record, Mapping):
                raise ValueError(f"Manifest #{index} in {source} is not an object")
            manifests.append(PackageManifest.from_dict(record))

        logger.debug("Read %d manifests from %s", len(manifests), source)
        return manifests
