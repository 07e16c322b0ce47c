"""Output reporters for license listings and disclaimers.

This module provides reporters for rendering aggregated license data to
the tree, table, JSON disclaimer and plain-text notice formats.
"""

from license_lister.reporters.base import BaseReporter
from license_lister.reporters.disclaimer import (
    DisclaimerReporter,
    NoticeReporter,
    build_entries,
)
from license_lister.reporters.table import TABLE_HEAD, TableReporter
from license_lister.reporters.tree import TreeReporter

__all__ = [
    "BaseReporter",
    "DisclaimerReporter",
    "NoticeReporter",
    "TABLE_HEAD",
    "TableReporter",
    "TreeReporter",
    "build_entries",
]
