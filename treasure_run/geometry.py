"""Rectangle and random helpers shared by the systems and the generator."""

import math


def overlaps(ax, ay, aw, ah, bx, by, bw, bh):
    # Touching edges do not count as overlap.
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def rects_overlap(a, b):
    """Overlap test for anything exposing x, y, width and height."""
    return overlaps(a.x, a.y, a.width, a.height, b.x, b.y, b.width, b.height)


def padded(rect, padding):
    """Return (x, y, w, h) of ``rect`` grown by ``padding`` on every side."""
    return (
        rect.x - padding,
        rect.y - padding,
        rect.width + 2 * padding,
        rect.height + 2 * padding,
    )


def center(rect):
    return rect.x + rect.width / 2, rect.y + rect.height / 2


def distance(ax, ay, bx, by):
    return math.hypot(ax - bx, ay - by)


def random_range(rng, low, high):
    """Uniform float in [low, high) from a numpy Generator.

    A collapsed range returns ``low`` so a cramped canvas degrades to a
    fixed position instead of sampling outside the bounds.
    """
    if high <= low:
        return float(low)
    return float(rng.uniform(low, high))
