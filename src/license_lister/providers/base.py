"""Base interface for manifest providers.

Providers hand the rest of license_lister a flat list of installed package
manifests. Resolving, installing and hydrating the dependency graph is
their job; the aggregator and the reporters only consume the result.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from license_lister.models import PackageManifest

DEFAULT_MODULES_FOLDER = "node_modules"


@dataclass(frozen=True)
class ProviderFlags:
    """Command-line flags passed through to the provider untouched.

    Attributes:
        modules_folder: Name of the folder packages are installed into.
        ignore_platform: Do not mark packages whose ``os``/``cpu`` fields
            exclude the current platform as ignored.
    """

    modules_folder: str = DEFAULT_MODULES_FOLDER
    ignore_platform: bool = False


class ManifestProvider(ABC):
    """Abstract base class for manifest providers.

    Attributes:
        source_path: Optional path to the install or dump being read.
    """

    def __init__(self, source_path: Optional[Path] = None) -> None:
        """Initialize the provider.

        Args:
            source_path: Optional path to read manifests from.
        """
        self.source_path = source_path

    @abstractmethod
    async def get_manifests(
        self, flags: Optional[ProviderFlags] = None
    ) -> list[PackageManifest]:
        """Return every resolved manifest, in provider order.

        Args:
            flags: Pass-through command-line flags.

        Returns:
            Flat list of manifests.

        Raises:
            FileNotFoundError: If the source does not exist.
            ValueError: If the source cannot be read as manifests.
        """
        ...

    @classmethod
    @abstractmethod
    def can_handle(cls, path: Path) -> bool:
        """Check if this provider can read the given path."""
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable name for this provider's source type."""
        ...

    def _require_source(self) -> Path:
        if self.source_path is None:
            raise ValueError("source_path must be set before calling get_manifests()")
        if not self.source_path.exists():
            raise FileNotFoundError(f"Path not found: {self.source_path}")
        return self.source_path
