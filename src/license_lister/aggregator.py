"""Sorting, filtering and license grouping of resolved manifests.

Turns the flat manifest list returned by a provider into ordered license
buckets. Everything here is a pure function of its input: the same
manifests always produce the same bucket order, in-bucket order and field
values.
"""

import logging
from collections.abc import Iterable
from functools import lru_cache
from typing import Optional

from pyuca import Collator

from license_lister.models import (
    UNKNOWN_LICENSE,
    LicenseGroup,
    PackageLicenseInfo,
    PackageManifest,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _collator() -> Collator:
    """Return the process-wide collator for the default Unicode ordering."""
    return Collator()


def _name_sort_key(manifest: PackageManifest) -> tuple[bool, tuple[int, ...]]:
    """Sort key following the Unicode Collation Algorithm.

    Names compare the way a locale-aware comparison orders them: punctuation
    before digits before letters, letters case-insensitively first and
    lowercase before uppercase on a tie. Unnamed manifests go last and,
    because ``sorted`` is stable, keep their relative order.
    """
    name = manifest.name
    if not name:
        return (True, ())
    return (False, _collator().sort_key(name))


def sort_manifests(manifests: Iterable[PackageManifest]) -> list[PackageManifest]:
    """Return manifests sorted by name, unnamed ones last."""
    return sorted(manifests, key=_name_sort_key)


def is_included(manifest: PackageManifest) -> bool:
    """Check whether a manifest takes part in aggregation.

    Args:
        manifest: Manifest to check.

    Returns:
        False if the manifest has no reference or its reference is ignored.
    """
    return manifest.reference is not None and not manifest.reference.ignore


def collect(manifests: Iterable[PackageManifest]) -> list[PackageManifest]:
    """Sort manifests by name and drop the ignored ones.

    Args:
        manifests: Manifests as returned by a provider.

    Returns:
        New list, sorted by name, without unreferenced or ignored manifests.
    """
    collected = [m for m in sort_manifests(manifests) if is_included(m)]
    logger.debug("Collected %d manifests for aggregation", len(collected))
    return collected


def license_key(manifest: PackageManifest) -> str:
    return manifest.license or UNKNOWN_LICENSE


def package_url(manifest: PackageManifest) -> Optional[str]:
    """Repository URL, else homepage."""
    return manifest.repository_url or manifest.homepage


def vendor_url(manifest: PackageManifest) -> Optional[str]:
    """Homepage, else the author's URL."""
    if manifest.homepage:
        return manifest.homepage
    return manifest.author.url if manifest.author else None


def vendor_name(manifest: PackageManifest) -> Optional[str]:
    return manifest.author.name if manifest.author else None


def license_info(manifest: PackageManifest) -> PackageLicenseInfo:
    """Derive the listing view of a single manifest."""
    return PackageLicenseInfo(
        name=manifest.name,
        version=manifest.version,
        url=package_url(manifest),
        vendor_url=vendor_url(manifest),
        vendor_name=vendor_name(manifest),
    )


def group(manifests: Iterable[PackageManifest]) -> dict[str, LicenseGroup]:
    """Group manifests into license buckets.

    Buckets are keyed by license (``"UNKNOWN"`` when absent) and keep the
    order in which each license is first seen. Within a bucket, packages are
    keyed by ``name@version`` in insertion order; a later manifest with the
    same key replaces the earlier entry in place.

    Args:
        manifests: Manifests, normally the output of :func:`collect`.

    Returns:
        Ordered mapping of license key to :class:`LicenseGroup`.
    """
    groups: dict[str, LicenseGroup] = {}

    for manifest in manifests:
        key = license_key(manifest)
        bucket = groups.get(key)
        if bucket is None:
            bucket = groups[key] = LicenseGroup(license=key)
        bucket.packages[manifest.package_key] = license_info(manifest)

    logger.debug(
        "Grouped %d packages under %d licenses", count_packages(groups), len(groups)
    )
    return groups


def count_packages(groups: dict[str, LicenseGroup]) -> int:
    """Return the number of packages across all buckets."""
    return sum(len(bucket) for bucket in groups.values())
