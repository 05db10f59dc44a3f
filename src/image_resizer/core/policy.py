"""Resize policy: decide whether an image needs scaling and to what size."""

from .models import NoResizeNeeded, ResizeDecision, ResizeTo


def _round_half_up(numerator: int, denominator: int) -> int:
    # Exact half-away-from-zero for non-negative operands.
    return (2 * numerator + denominator) // (2 * denominator)


def decide(width: int, height: int, longest_side: int) -> ResizeDecision:
    """
    Decide whether an image of ``width`` x ``height`` must be scaled down.

    The boundary is inclusive: an image whose longest side equals
    ``longest_side`` is left alone. Otherwise the longer dimension becomes
    exactly ``longest_side`` and the shorter one is scaled by the same ratio,
    rounded half away from zero and never below one pixel.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        longest_side: Target length of the longest side in pixels

    Returns:
        ``NoResizeNeeded()`` or ``ResizeTo(new_width, new_height)``
    """
    if width <= longest_side and height <= longest_side:
        return NoResizeNeeded()

    if width >= height:
        return ResizeTo(longest_side, max(1, _round_half_up(longest_side * height, width)))
    return ResizeTo(max(1, _round_half_up(longest_side * width, height)), longest_side)
