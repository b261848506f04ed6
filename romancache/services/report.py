"""Plain-text rendering of summaries and strategy timings for the console."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Sequence

from romancache.numerals.types import SummaryRow

__all__ = ["format_summary", "format_timings"]


def format_summary(rows: Sequence[SummaryRow]) -> List[str]:
    """Render ``value - label - count`` lines with aligned columns."""

    if not rows:
        return []
    value_width = max(len(str(row.value)) for row in rows)
    label_width = max(len(row.label) for row in rows)
    return [
        f"{row.value:>{value_width}} - {row.label:<{label_width}} - {row.count}"
        for row in rows
    ]


def format_timings(
    timings: Mapping[str, Mapping[str, float]],
    *,
    prefix: str = "mapping.",
    labels: Iterable[str] | None = None,
) -> List[str]:
    """Render one line per timing label under ``prefix``, fastest average first."""

    wanted = set(labels) if labels is not None else None
    selected = {
        label[len(prefix):]: stats
        for label, stats in timings.items()
        if label.startswith(prefix) and (wanted is None or label[len(prefix):] in wanted)
    }
    if not selected:
        return []
    name_width = max(len(name) for name in selected)
    ordered = sorted(selected.items(), key=lambda item: (item[1].get("avg_ms", 0.0), item[0]))
    return [
        f"{name:<{name_width}}  avg {stats.get('avg_ms', 0.0):9.3f} ms"
        f"  max {stats.get('max_ms', 0.0):9.3f} ms  runs {int(stats.get('count', 0))}"
        for name, stats in ordered
    ]
