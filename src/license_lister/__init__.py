"""License Lister - license listings and disclaimers for installed packages.

This package groups resolved package manifests by license and renders them
as a tree, a structured table, or a third-party disclaimer.
"""

__version__ = "0.1.0"
__author__ = "forkrul"

from license_lister.models import (
    DisclaimerEntry,
    LicenseGroup,
    PackageAuthor,
    PackageLicenseInfo,
    PackageManifest,
    PackageReference,
)

__all__ = [
    "__version__",
    "DisclaimerEntry",
    "LicenseGroup",
    "PackageAuthor",
    "PackageLicenseInfo",
    "PackageManifest",
    "PackageReference",
]
