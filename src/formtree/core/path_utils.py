"""
Path resolution utilities for control trees.

Paths address descendants of a control either as a delimited string
("address.lines.0") or as an explicit sequence of segments
(["address", "lines", 0]). String segments index groups by name, integer
segments (or numeric strings) index arrays by position.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from formtree.core.types import DEFAULT_PATH_DELIMITER, ControlPath, PathSegment

if TYPE_CHECKING:
    from formtree.controls.base import Control


@dataclass
class PathComponents:
    """Result of splitting a path at its first segment."""

    first_part: PathSegment | None
    remainder: list[PathSegment]

    @property
    def has_remainder(self) -> bool:
        return bool(self.remainder)

    @classmethod
    def split_path(
        cls, path: ControlPath | None, delimiter: str = DEFAULT_PATH_DELIMITER
    ) -> "PathComponents":
        """
        Split a path into its head segment and the remaining segments.

        Params:
            path: Delimited string or segment sequence
            delimiter: Separator used when path is a string

        Returns:
            PathComponents with first_part None for an empty path

        Examples:
            "address.city" -> PathComponents("address", ["city"])
            ["lines", 0] -> PathComponents("lines", [0])
        """
        segments = PathResolver.split_path_components(path, delimiter)
        if not segments:
            return cls(first_part=None, remainder=[])
        return cls(first_part=segments[0], remainder=segments[1:])


class PathResolver:
    """Path splitting, joining and descendant lookup."""

    @staticmethod
    def split_path_components(
        path: ControlPath | None, delimiter: str = DEFAULT_PATH_DELIMITER
    ) -> list[PathSegment]:
        """
        Split a path into all its segments.

        Params:
            path: Delimited string or segment sequence (None yields no segments)
            delimiter: Separator used when path is a string

        Returns:
            List of path segments

        Examples:
            "address.lines.0" -> ["address", "lines", "0"]
            "" -> []
        """
        if path is None:
            return []
        if isinstance(path, str):
            return path.split(delimiter) if path else []
        return list(path)

    @staticmethod
    def join(segments: Sequence[PathSegment], delimiter: str = DEFAULT_PATH_DELIMITER) -> str:
        """Join segments back into a delimited string."""
        return delimiter.join(str(segment) for segment in segments)

    @staticmethod
    def find(
        control: "Control",
        path: ControlPath | None,
        delimiter: str = DEFAULT_PATH_DELIMITER,
    ) -> "Control | None":
        """
        Walk a path through the descendants of a control.

        Params:
            control: Control the path is relative to
            path: Delimited string or segment sequence
            delimiter: Separator used when path is a string

        Returns:
            The addressed descendant, or None when the path is empty, a segment
            is missing, or a leaf is reached before the path is exhausted
        """
        segments = PathResolver.split_path_components(path, delimiter)
        if not segments:
            return None

        current: Control | None = control
        for segment in segments:
            current = current._get_child(segment)
            if current is None:
                return None
        return current
