from __future__ import annotations

from typing import Iterable

from ..core.enums import Medal
from .model import Achievement


def medal_tally(achievements: Iterable[Achievement]) -> dict[str, int]:
    """Count achievements per medal tier, always reporting all three tiers."""
    counts = {m.value: 0 for m in Medal}
    for a in achievements:
        counts[Medal(a.medal).value] += 1
    return counts
