"""Manifest providers for installed dependency sets.

This module provides the providers that read resolved package manifests
from an install or a pre-resolved dump.
"""

from pathlib import Path

from license_lister.providers.base import (
    DEFAULT_MODULES_FOLDER,
    ManifestProvider,
    ProviderFlags,
)
from license_lister.providers.manifest_file import ManifestFileProvider
from license_lister.providers.node_modules import NodeModulesProvider

__all__ = [
    "DEFAULT_MODULES_FOLDER",
    "ManifestFileProvider",
    "ManifestProvider",
    "NodeModulesProvider",
    "ProviderFlags",
    "get_provider",
]

# Registry of available providers in priority order
_PROVIDERS: list[type[ManifestProvider]] = [
    ManifestFileProvider,
    NodeModulesProvider,
]


def get_provider(path: Path) -> ManifestProvider:
    """Get the appropriate provider for a given path.

    Args:
        path: A project directory, a modules folder, or a manifest dump.

    Returns:
        Provider instance configured for the given path.

    Raises:
        FileNotFoundError: If the path does not exist.
        ValueError: If no provider can handle the given path.
    """
    if not path.exists():
        raise FileNotFoundError(f"Path not found: {path}")

    for provider_cls in _PROVIDERS:
        if provider_cls.can_handle(path):
            return provider_cls(path)

    raise ValueError(
        f"No manifest provider available for '{path.name}'. "
        f"Supported sources: a project directory, a node_modules folder, "
        f"or a JSON manifest dump"
    )
