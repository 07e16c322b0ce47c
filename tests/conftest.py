"""Pytest configuration and fixtures."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from license_lister.models import PackageAuthor, PackageManifest, PackageReference


@pytest.fixture
def make_manifest() -> Callable[..., PackageManifest]:
    """Return a factory for referenced, non-ignored manifests."""

    def _make(
        name: str | None = "pkg",
        version: str = "1.0.0",
        ignore: bool = False,
        referenced: bool = True,
        **kwargs: Any,
    ) -> PackageManifest:
        reference = PackageReference(ignore=ignore) if referenced else None
        return PackageManifest(name=name, version=version, reference=reference, **kwargs)

    return _make


@pytest.fixture
def example_manifests(make_manifest) -> list[PackageManifest]:
    """Three manifests: two MIT packages out of order and one unlicensed."""
    return [
        make_manifest("b", "1.0", license="MIT"),
        make_manifest("a", "2.0", license="MIT"),
        make_manifest("c", "1.0"),
    ]


@pytest.fixture
def detailed_manifest(make_manifest) -> PackageManifest:
    """A manifest with every optional listing field set."""
    return make_manifest(
        "left-pad",
        "1.3.0",
        license="WTFPL",
        repository_url="git://github.com/stevemao/left-pad.git",
        homepage="https://left-pad.dev",
        author=PackageAuthor(name="azer", url="https://azer.bike"),
    )


def write_package(
    modules_dir: Path,
    name: str,
    manifest: dict[str, Any],
    license_text: str | None = None,
) -> Path:
    """Install a fake package into ``modules_dir`` and return its folder."""
    package_dir = modules_dir / name
    package_dir.mkdir(parents=True)
    (package_dir / "package.json").write_text(json.dumps({"name": name, **manifest}))
    if license_text is not None:
        (package_dir / "LICENSE").write_text(license_text)
    return package_dir


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a project with a small installed node_modules tree."""
    modules = tmp_path / "node_modules"
    write_package(
        modules,
        "zeta",
        {
            "version": "2.0.0",
            "license": "MIT",
            "homepage": "https://zeta.dev",
            "author": "Zed <zed@zeta.dev> (https://zed.dev)",
        },
        license_text="  MIT License\n\nCopyright Zed\n",
    )
    write_package(
        modules,
        "alpha",
        {
            "version": "1.0.0",
            "license": "ISC",
            "repository": {"type": "git", "url": "https://github.com/x/alpha"},
        },
    )
    write_package(modules, "secret", {"version": "0.1.0", "private": True})
    return tmp_path


@pytest.fixture
def install_package() -> Callable[..., Path]:
    """Return the helper that installs a fake package into a modules folder."""
    return write_package
