"""Scroll window arithmetic shared by every scrolling widget."""

from typing import Optional

from .errors import ConfigurationError


def max_offset(total: int, window: int) -> int:
    """Largest offset that still fills the window (0 if everything fits)."""
    return max(0, total - window)


def adjust_offset(selected: Optional[int], total: int, window: int, offset: int) -> int:
    """Return the scroll offset that keeps ``selected`` inside the window.

    The window is ``[offset, offset + window)``. If the selection is above the
    window it becomes the top row; if it is below, it becomes the bottom row.
    Otherwise the offset is kept. The result is clamped to
    ``[0, max(0, total - window)]``.

    Args:
        selected: Index that must stay visible, or None for no selection.
        total: Number of rows in the collection.
        window: Number of visible rows (must be at least 1).
        offset: Current offset.

    Returns:
        The new offset.

    Raises:
        ConfigurationError: If window is smaller than 1.
    """
    if window < 1:
        raise ConfigurationError(f"Scroll window must be at least 1 row, got {window}")
    if selected is None:
        return offset

    if selected < offset:
        new_offset = selected
    elif selected >= offset + window:
        new_offset = selected - window + 1
    else:
        new_offset = offset

    return max(0, min(new_offset, max_offset(total, window)))


def visible_range(offset: int, window: int, total: int) -> range:
    """Indices shown by a window starting at ``offset``."""
    start = max(0, min(offset, total))
    return range(start, min(total, start + window))
