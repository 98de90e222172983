"""
Windowing contract for long record lists.

A renderer that only draws the visible slice of a list needs three numbers:
the item count, a fixed per-item extent and the viewport extent. From those
and the scroll offset it asks for the index range to draw, and asks again
whenever any of the three change. Units are whatever the renderer uses
(terminal rows here).
"""

from __future__ import annotations

from dataclasses import dataclass

# Extra items rendered above and below the visible slice
DEFAULT_OVERSCAN = 10


@dataclass(frozen=True)
class Viewport:
    """Geometry of a windowed list.

    Attributes:
        item_count: Total number of items (N).
        item_extent: Extent of each item, fixed (S).
        viewport_extent: Visible extent (H).
    """

    item_count: int
    item_extent: int = 1
    viewport_extent: int = 0

    def __post_init__(self) -> None:
        if self.item_extent <= 0:
            raise ValueError(f"item_extent must be positive, got {self.item_extent}")
        if self.item_count < 0 or self.viewport_extent < 0:
            raise ValueError("item_count and viewport_extent cannot be negative")

    @property
    def content_extent(self) -> int:
        return self.item_count * self.item_extent

    @property
    def max_scroll_offset(self) -> int:
        return max(0, self.content_extent - self.viewport_extent)

    def clamp_offset(self, scroll_offset: int) -> int:
        return min(max(0, scroll_offset), self.max_scroll_offset)

    def visible_range(self, scroll_offset: int, overscan: int = 0) -> range:
        """Indices of the items intersecting the viewport.

        Args:
            scroll_offset: Offset of the viewport's leading edge.
            overscan: Extra items to include on each side.

        Returns:
            A range of item indices, empty when there is nothing to show.

        Examples:
            >>> Viewport(100, 1, 10).visible_range(5)
            range(5, 15)
        """
        if self.item_count == 0 or self.viewport_extent == 0:
            return range(0)
        offset = self.clamp_offset(scroll_offset)
        first = offset // self.item_extent
        last = -(-(offset + self.viewport_extent) // self.item_extent)
        first = max(0, first - overscan)
        last = min(self.item_count, last + overscan)
        return range(first, last)

    def offset_for_index(self, index: int) -> int:
        """Scroll offset placing ``index`` at the leading edge."""
        return self.clamp_offset(index * self.item_extent)

    def scroll_to_reveal(self, index: int, scroll_offset: int) -> int:
        """Smallest scroll change that brings ``index`` fully into view."""
        start = index * self.item_extent
        end = start + self.item_extent
        if start < scroll_offset:
            return self.clamp_offset(start)
        if end > scroll_offset + self.viewport_extent:
            return self.clamp_offset(end - self.viewport_extent)
        return self.clamp_offset(scroll_offset)

    def index_at(self, scroll_offset: int, position: int) -> int | None:
        """Item index under a viewport-relative position, or None."""
        index = (scroll_offset + position) // self.item_extent
        if 0 <= index < self.item_count:
            return index
        return None
