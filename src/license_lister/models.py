"""Core data models for license_lister.

This module defines the data structures shared by the providers, the
aggregator and the reporters: resolved package manifests as read from an
install, and the derived per-license and per-disclaimer views built from
them.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

UNKNOWN_LICENSE = "UNKNOWN"

# "Name <email> (url)", every part optional
_PERSON_RE = re.compile(
    r"^\s*(?P<name>[^<(]*?)\s*(?:<(?P<email>[^>]*)>)?\s*(?:\((?P<url>[^)]*)\))?\s*$"
)


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True)
class PackageReference:
    """Resolver bookkeeping attached to an installed manifest.

    Attributes:
        ignore: True if the resolver decided this package should be skipped
            (e.g. an optional dependency incompatible with the platform).
    """

    ignore: bool = False


@dataclass(frozen=True)
class PackageAuthor:
    """Author of a package as declared in its manifest."""

    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def parse(cls, value: Any) -> Optional["PackageAuthor"]:
        """Build an author from a person mapping or a person string.

        Args:
            value: Either ``{"name": ..., "url": ..., "email": ...}`` or a
                string like ``"Jane Doe <jane@example.com> (https://jane.dev)"``.

        Returns:
            The parsed author, or None if nothing usable was given.
        """
        if isinstance(value, Mapping):
            return cls(
                name=_str_or_none(value.get("name")),
                url=_str_or_none(value.get("url")),
                email=_str_or_none(value.get("email")),
            )

        if isinstance(value, str) and value.strip():
            match = _PERSON_RE.match(value)
            if match is None:
                return cls(name=value.strip())
            return cls(
                name=match.group("name") or None,
                url=_str_or_none(match.group("url")),
                email=_str_or_none(match.group("email")),
            )

        return None


@dataclass(frozen=True)
class PackageManifest:
    """Immutable metadata for one resolved, installed package.

    Attributes:
        name: Package name; may be absent for broken installs.
        version: Installed version string.
        license: Declared license identifier or expression.
        repository_url: Source repository URL.
        homepage: Project homepage URL.
        author: Declared author, if any.
        license_text: Contents of the package's license file.
        private: True if the package is marked private.
        reference: Resolver reference; None means the resolver never saw it.
    """

    name: Optional[str]
    version: str
    license: Optional[str] = None
    repository_url: Optional[str] = None
    homepage: Optional[str] = None
    author: Optional[PackageAuthor] = None
    license_text: Optional[str] = None
    private: bool = False
    reference: Optional[PackageReference] = None

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        reference: Optional[PackageReference] = None,
    ) -> "PackageManifest":
        """Build a manifest from a ``package.json``-shaped mapping.

        Args:
            data: Raw manifest mapping.
            reference: Reference to attach. When omitted, the ``_reference``
                key of ``data`` is used if present.

        Returns:
            The parsed manifest. Missing optional fields stay None.
        """
        repository = data.get("repository")
        if isinstance(repository, Mapping):
            repository_url = _str_or_none(repository.get("url"))
        else:
            repository_url = _str_or_none(repository)

        license_value = data.get("license")
        if isinstance(license_value, Mapping):
            license_value = license_value.get("type")
        if not license_value and isinstance(data.get("licenses"), list):
            legacy = data["licenses"]
            if legacy and isinstance(legacy[0], Mapping):
                license_value = legacy[0].get("type")

        if reference is None:
            raw_reference = data.get("_reference")
            if isinstance(raw_reference, Mapping):
                reference = PackageReference(ignore=bool(raw_reference.get("ignore")))

        version = data.get("version")

        return cls(
            name=_str_or_none(data.get("name")),
            version=version if isinstance(version, str) else "",
            license=_str_or_none(license_value),
            repository_url=repository_url,
            homepage=_str_or_none(data.get("homepage")),
            author=PackageAuthor.parse(data.get("author")),
            license_text=_str_or_none(data.get("licenseText")),
            private=bool(data.get("private", False)),
            reference=reference,
        )

    @property
    def package_key(self) -> str:
        """Return the ``name@version`` key identifying this package.

        An unnamed package keys as ``"@<version>"``.
        """
        return f"{self.name or ''}@{self.version}"


@dataclass(frozen=True)
class PackageLicenseInfo:
    """Per-package view shown in license listings.

    Attributes:
        name: Package name.
        version: Package version.
        url: Repository URL, else homepage.
        vendor_url: Homepage, else the author's URL.
        vendor_name: The author's name.
    """

    name: Optional[str]
    version: str
    url: Optional[str] = None
    vendor_url: Optional[str] = None
    vendor_name: Optional[str] = None


@dataclass
class LicenseGroup:
    """All packages sharing one license key, in insertion order.

    Attributes:
        license: The license key (declared license or ``"UNKNOWN"``).
        packages: Mapping of ``name@version`` to the package's info.
    """

    license: str
    packages: dict[str, PackageLicenseInfo] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.packages)


@dataclass(frozen=True)
class DisclaimerEntry:
    """Flattened record used for third-party legal notices."""

    name: Optional[str]
    version: str
    license_text: Optional[str] = None
    license: Optional[str] = None
    homepage: Optional[str] = None

    def to_dict(self) -> dict[str, str]:
        """Return the JSON shape of this entry, dropping absent values."""
        data = {
            "name": self.name,
            "version": self.version,
            "licenseText": self.license_text,
            "license": self.license,
            "homepage": self.homepage,
        }
        return {key: value for key, value in data.items() if value is not None}
