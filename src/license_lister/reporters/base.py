"""Base interface for output reporters.

Reporters turn aggregated license data (or disclaimer entries) into a
single rendered document.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class BaseReporter(ABC):
    """Abstract base class for output reporters.

    Each reporter is a pure formatter: the same input always renders to the
    same output, and nothing is kept between calls.
    """

    @abstractmethod
    def render(self, data: Any) -> str:
        """Render data to formatted output.

        Args:
            data: License groups or disclaimer entries, depending on the
                reporter.

        Returns:
            Rendered output as a string.
        """
        ...

    def write(self, data: Any, output_path: Path) -> None:
        """Render and write output to a file.

        Args:
            data: Data accepted by :meth:`render`.
            output_path: Path to write the output file.
        """
        content = self.render(data)
        output_path.write_text(content, encoding="utf-8")

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            Format name like "tree", "table", "json", etc.
        """
        ...

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Return the default file extension for this format.

        Returns:
            Extension like ".txt", ".json", etc.
        """
        ...
