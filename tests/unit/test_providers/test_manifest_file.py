"""Unit tests for ManifestFileProvider and provider selection."""

import json
from pathlib import Path

import pytest

from license_lister.models import PackageReference
from license_lister.providers import (
    ManifestFileProvider,
    NodeModulesProvider,
    get_provider,
)


@pytest.fixture
def dump_path(tmp_path: Path) -> Path:
    """Write a manifest dump with one ignored and one unreferenced record."""
    path = tmp_path / "manifests.json"
    records = [
        {"name": "b", "version": "1.0", "license": "MIT", "_reference": {}},
        {"name": "a", "version": "2.0", "_reference": {"ignore": True}},
        {"name": "c", "version": "3.0"},
    ]
    path.write_text(json.dumps(records))
    return path


class TestManifestFileProvider:
    """Test suite for ManifestFileProvider."""

    def test_can_handle_json_file(self, dump_path: Path) -> None:
        assert ManifestFileProvider.can_handle(dump_path)

    def test_can_handle_other_files(self, tmp_path: Path) -> None:
        lock_file = tmp_path / "yarn.lock"
        lock_file.write_text("")
        assert not ManifestFileProvider.can_handle(lock_file)
        assert not ManifestFileProvider.can_handle(tmp_path)

    @pytest.mark.asyncio
    async def test_reads_records_in_order(self, dump_path: Path) -> None:
        manifests = await ManifestFileProvider(dump_path).get_manifests()

        assert [m.package_key for m in manifests] == ["b@1.0", "a@2.0", "c@3.0"]
        assert manifests[0].reference == PackageReference(ignore=False)
        assert manifests[1].reference == PackageReference(ignore=True)
        assert manifests[2].reference is None

    @pytest.mark.asyncio
    async def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "manifests.json"
        path.write_text("[{")

        with pytest.raises(ValueError, match="Invalid JSON"):
            await ManifestFileProvider(path).get_manifests()

    @pytest.mark.asyncio
    async def test_not_an_array(self, tmp_path: Path) -> None:
        path = tmp_path / "manifests.json"
        path.write_text('{"name": "a"}')

        with pytest.raises(ValueError, match="Expected a JSON array"):
            await ManifestFileProvider(path).get_manifests()

    @pytest.mark.asyncio
    async def test_record_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "manifests.json"
        path.write_text('[{"name": "a", "version": "1"}, "b"]')

        with pytest.raises(ValueError, match="Manifest #1"):
            await ManifestFileProvider(path).get_manifests()


class TestGetProvider:
    """Test suite for get_provider."""

    def test_json_dump(self, dump_path: Path) -> None:
        assert isinstance(get_provider(dump_path), ManifestFileProvider)

    def test_directory(self, tmp_path: Path) -> None:
        assert isinstance(get_provider(tmp_path), NodeModulesProvider)

    def test_unsupported_file(self, tmp_path: Path) -> None:
        lock_file = tmp_path / "yarn.lock"
        lock_file.write_text("")

        with pytest.raises(ValueError, match="No manifest provider available"):
            get_provider(lock_file)

    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            get_provider(tmp_path / "missing")
