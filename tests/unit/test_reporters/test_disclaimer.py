"""Tests for the disclaimer and notice reporters."""

import json

import pytest

from license_lister.models import DisclaimerEntry
from license_lister.reporters.disclaimer import (
    DisclaimerReporter,
    NoticeReporter,
    build_entries,
    group_by_license_text,
)


class TestBuildEntries:
    """Test suite for build_entries."""

    def test_private_manifest_is_excluded(self, make_manifest) -> None:
        manifest = make_manifest("x", "1.0", private=True, license_text=" MIT License ")
        assert build_entries([manifest]) == []

    def test_license_text_is_trimmed(self, make_manifest) -> None:
        manifest = make_manifest("x", "1.0", license_text=" MIT License ")
        assert build_entries([manifest])[0].license_text == "MIT License"

    def test_missing_license_text_stays_absent(self, make_manifest) -> None:
        entry = build_entries([make_manifest("x", "1.0")])[0]
        assert entry.license_text is None

    def test_keeps_provider_order_and_ignored(self, make_manifest) -> None:
        """Test that order, ignored and unreferenced packages are untouched."""
        manifests = [
            make_manifest("z", ignore=True),
            make_manifest("a", referenced=False),
            make_manifest(None),
        ]
        assert [entry.name for entry in build_entries(manifests)] == ["z", "a", None]

    def test_copies_fields(self, make_manifest) -> None:
        manifest = make_manifest(
            "x", "1.0", license="MIT", homepage="https://x", repository_url="r"
        )
        assert build_entries([manifest]) == [
            DisclaimerEntry(name="x", version="1.0", license="MIT", homepage="https://x")
        ]


class TestDisclaimerReporter:
    """Test suite for DisclaimerReporter."""

    def test_render_json_array(self, make_manifest) -> None:
        manifests = [
            make_manifest("b", "1.0", license="MIT", license_text="\nMIT License\n"),
            make_manifest("a", "2.0", homepage="https://a"),
            make_manifest("hidden", private=True),
        ]

        data = json.loads(DisclaimerReporter().render(build_entries(manifests)))

        assert data == [
            {"name": "b", "version": "1.0", "licenseText": "MIT License", "license": "MIT"},
            {"name": "a", "version": "2.0", "homepage": "https://a"},
        ]

    def test_render_is_compact(self) -> None:
        entry = DisclaimerEntry(name="a", version="1")
        assert DisclaimerReporter().render([entry]) == '[{"name":"a","version":"1"}]'

    def test_render_empty(self) -> None:
        assert DisclaimerReporter().render([]) == "[]"


class TestNoticeReporter:
    """Test suite for NoticeReporter."""

    @pytest.fixture
    def entries(self) -> list[DisclaimerEntry]:
        return [
            DisclaimerEntry(name="a", version="1", license_text="MIT text", license="MIT"),
            DisclaimerEntry(name="b", version="2", license_text="ISC text", license="ISC"),
            DisclaimerEntry(name="c", version="3", license_text="MIT text", license="MIT"),
            DisclaimerEntry(name="d", version="4", homepage="https://d.dev"),
        ]

    def test_group_by_license_text(self, entries) -> None:
        sections = group_by_license_text(entries)

        assert [text for text, _ in sections] == ["MIT text", "ISC text"]
        assert [entry.name for entry in sections[0][1]] == ["a", "c"]

    def test_render_groups_shared_texts(self, entries) -> None:
        output = NoticeReporter().render(entries)

        assert output.startswith("THE FOLLOWING SETS FORTH ATTRIBUTION NOTICES")
        assert output.count("MIT text") == 1
        assert "included in this product: a, c." in output
        assert "included in this product: b." in output

    def test_render_lists_packages_without_text(self, entries) -> None:
        output = NoticeReporter().render(entries)
        assert "- d@4 (UNKNOWN) https://d.dev" in output

    def test_render_unnamed_packages_with_placeholder(self) -> None:
        entries = [
            DisclaimerEntry(name=None, version="1.0", license_text="MIT text"),
            DisclaimerEntry(name=None, version="2.0", license="ISC"),
        ]

        output = NoticeReporter().render(entries)

        assert "None" not in output
        assert "included in this product: (unnamed)." in output
        assert "- (unnamed)@2.0 (ISC)" in output

    def test_custom_template(self, tmp_path, entries) -> None:
        template = tmp_path / "custom.j2"
        template.write_text("{% for text, group in sections %}{{ text }};{% endfor %}")

        output = NoticeReporter(template_path=template).render(entries)

        assert output == "MIT text;ISC text;"

    def test_write(self, tmp_path, entries) -> None:
        output_path = tmp_path / "NOTICE.txt"
        NoticeReporter().write(entries, output_path)
        assert "ISC text" in output_path.read_text()

    def test_reporter_formats(self) -> None:
        assert NoticeReporter().format_name == "text"
        assert DisclaimerReporter().format_name == "json"
