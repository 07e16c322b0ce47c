"""Tree reporter for human-readable license listings.

Renders license groups as a two-level Rich tree: one branch per license,
one node per package, with the package's URLs and vendor as leaves.
"""

import io

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from license_lister.models import LicenseGroup, PackageLicenseInfo
from license_lister.reporters.base import BaseReporter

ROOT_LABEL = "licenses"


def _field_label(label: str, value: str) -> Text:
    # Text.assemble keeps URLs containing "[" from being read as markup
    return Text.assemble((f"{label}:", "bold"), f" {value}")


def package_leaves(info: PackageLicenseInfo) -> list[Text]:
    """Return the detail leaves of a package node, in display order.

    Only fields that are present produce a leaf.
    """
    leaves = []
    if info.url:
        leaves.append(_field_label("URL", info.url))
    if info.vendor_url:
        leaves.append(_field_label("VendorUrl", info.vendor_url))
    if info.vendor_name:
        leaves.append(_field_label("VendorName", info.vendor_name))
    return leaves


class TreeReporter(BaseReporter):
    """Reporter that renders license groups as a tree.

    The tree is always produced, even without any license groups, in which
    case it consists of the root label alone.

    Attributes:
        width: Console width used by :meth:`render`.
    """

    def __init__(self, width: int = 200) -> None:
        self.width = width

    def build_tree(self, groups: dict[str, LicenseGroup]) -> Tree:
        """Build the Rich tree for the given license groups.

        Args:
            groups: Ordered license groups from the aggregator.

        Returns:
            Tree rooted at ``"licenses"`` with branches in group order.
        """
        root = Tree(Text(ROOT_LABEL))

        for license_key, group in groups.items():
            branch = root.add(Text(license_key))
            for package_key, info in group.packages.items():
                node = branch.add(Text(package_key))
                for leaf in package_leaves(info):
                    node.add(leaf)

        return root

    def render(self, groups: dict[str, LicenseGroup]) -> str:
        """Render the tree as plain text without styling."""
        buffer = io.StringIO()
        console = Console(
            file=buffer,
            width=self.width,
            color_system=None,
            highlight=False,
        )
        console.print(self.build_tree(groups))
        return buffer.getvalue()

    @property
    def format_name(self) -> str:
        return "tree"

    @property
    def default_extension(self) -> str:
        return ".txt"
