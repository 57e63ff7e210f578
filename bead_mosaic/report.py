"""Per-colour usage totals for a finished mosaic."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from bead_mosaic.grid import Assignment


@dataclass(frozen=True)
class UsageSummary:
    """Pieces used per palette colour, in palette order."""

    counts: dict[str, int]
    total: int

    def lines(self) -> list[str]:
        out = [f"{name} - {count} pieces" for name, count in self.counts.items() if count]
        out.append(f"Total Pieces: {self.total}")
        return out


def _entry_key(a: Assignment) -> tuple:
    # palette position identifies an entry even when names repeat
    if a.palette_index is not None:
        return (a.palette_index,)
    return (a.name, a.color)


def summarize(assignments: Sequence[Assignment]) -> UsageSummary:
    """Group assignments by palette entry and count them.

    Entries are labelled by name. When two distinct entries share a name the
    label gains the RGB value, e.g. ``"Red rgb(200, 0, 0)"``.
    """
    counter: Counter[tuple] = Counter(_entry_key(a) for a in assignments)
    first: dict[tuple, Assignment] = {}
    for a in assignments:
        first.setdefault(_entry_key(a), a)

    def _order(key: tuple) -> tuple:
        a = first[key]
        idx = a.palette_index if a.palette_index is not None else -1
        return (idx, a.name or "", a.color)

    keys = sorted(counter, key=_order)
    name_uses = Counter(first[k].name for k in keys)

    counts: dict[str, int] = {}
    for key in keys:
        a = first[key]
        r, g, b = a.color
        label = a.name if a.name is not None else f"rgb({r}, {g}, {b})"
        if a.name is not None and name_uses[a.name] > 1:
            label = f"{a.name} rgb({r}, {g}, {b})"
        counts[label] = counts.get(label, 0) + counter[key]

    return UsageSummary(counts=counts, total=sum(counter.values()))


def format_report(summary: UsageSummary) -> str:
    """Render the usage summary as newline-separated report text."""
    return "\n".join(summary.lines())
