"""Table reporter for machine-readable license listings.

Flattens license groups into fixed six-column rows and presents them as a
structured JSON table document.
"""

import json
from typing import Optional

from license_lister.models import LicenseGroup
from license_lister.reporters.base import BaseReporter

TABLE_HEAD = ["Name", "Version", "License", "URL", "VendorUrl", "VendorName"]

PLACEHOLDER = "Unknown"


def _or_placeholder(value: Optional[str]) -> str:
    return value or PLACEHOLDER


def build_rows(groups: dict[str, LicenseGroup]) -> list[list[Optional[str]]]:
    """Flatten license groups into table rows.

    Rows follow group order, then package order within each group. Missing
    URL, vendor URL and vendor name are rendered as ``"Unknown"``.

    Args:
        groups: Ordered license groups from the aggregator.

    Returns:
        One ``[name, version, license, url, vendorUrl, vendorName]`` row per
        package.
    """
    rows: list[list[Optional[str]]] = []
    for license_key, group in groups.items():
        for info in group.packages.values():
            rows.append(
                [
                    info.name,
                    info.version,
                    license_key,
                    _or_placeholder(info.url),
                    _or_placeholder(info.vendor_url),
                    _or_placeholder(info.vendor_name),
                ]
            )
    return rows


class TableReporter(BaseReporter):
    """Reporter that renders license groups as a JSON table.

    Output shape::

        {"type": "table", "data": {"head": [...], "body": [[...], ...]}}
    """

    def render(self, groups: dict[str, LicenseGroup]) -> str:
        document = {
            "type": "table",
            "data": {"head": list(TABLE_HEAD), "body": build_rows(groups)},
        }
        return json.dumps(document, separators=(",", ":"))

    @property
    def format_name(self) -> str:
        return "table"

    @property
    def default_extension(self) -> str:
        return ".json"
