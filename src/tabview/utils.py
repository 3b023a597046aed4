"""Cell-width measurement for terminal text.

Text drawn on the canvas is split into grapheme clusters, and every cluster
occupies one or two cells.  Widths come from :mod:`wcwidth`; clusters come
from :mod:`grapheme`, so combining marks and emoji sequences stay attached to
their base character.
"""

from __future__ import annotations

import unicodedata
from typing import Iterator

import grapheme
import wcwidth as _wcwidth


def cluster_width(cluster: str) -> int:
    """Return the number of cells a single grapheme cluster occupies.

    Control characters and lone combining marks are zero-width.  Emoji
    sequences (VS16, ZWJ, skin tones, flags) are two cells wide.  Everything
    else is measured by wcwidth on its first codepoint.
    """
    if not cluster:
        return 0

    if len(cluster) == 1:
        cp = ord(cluster)
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        return max(_wcwidth.wcwidth(cluster), 0)

    for ch in cluster:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first = cluster[0]
    if ord(first) >= 0x1F000:
        return 2
    if unicodedata.category(first) in ("Mn", "Me", "Mc", "Cf"):
        return 0
    return max(_wcwidth.wcwidth(first), 0)


def iter_clusters(text: str) -> Iterator[tuple[str, int]]:
    """Yield ``(cluster, width)`` pairs for every grapheme in *text*.

    Zero-width clusters are skipped; they have no cell of their own.
    """
    for cluster in grapheme.graphemes(text):
        width = cluster_width(cluster)
        if width > 0:
            yield cluster, width


def clip_to_width(text: str, max_width: int) -> tuple[str, int]:
    """Cut *text* so it fits in *max_width* cells.

    Returns the clipped text and its width.  A wide character straddling the
    limit is dropped rather than split.
    """
    if max_width <= 0:
        return "", 0

    parts: list[str] = []
    used = 0
    for cluster, width in iter_clusters(text):
        if used + width > max_width:
            break
        parts.append(cluster)
        used += width
    return "".join(parts), used
