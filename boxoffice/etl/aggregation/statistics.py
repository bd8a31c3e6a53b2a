"""Five-number summary for box plots.

Quartiles use the split-halves method: for an odd sample the overall
median is excluded from both halves, and Q1/Q3 are the medians of the
halves.
"""

from collections.abc import Iterable, Sequence

from boxoffice.etl.aggregation.schemas import FiveNumberSummary, Number


def median(values: Sequence[Number]) -> Number:
    """Median of an already sorted, non-empty sequence.

    Args:
        values: Sorted values.

    Returns:
        Middle value, or the mean of the two middle values.
    """
    size = len(values)
    mid = size // 2
    if size % 2 == 0:
        return (values[mid - 1] + values[mid]) / 2
    return values[mid]


def five_number_summary(values: Iterable[Number]) -> FiveNumberSummary | None:
    """Compute min, Q1, median, Q3 and max.

    Args:
        values: Numeric sample, in any order.

    Returns:
        Summary, or None for an empty sample.
    """
    ordered = sorted(values)
    if not ordered:
        return None

    size = len(ordered)
    mid = size // 2
    lower_half = ordered[:mid]
    upper_half = ordered[mid if size % 2 == 0 else mid + 1 :]

    return FiveNumberSummary(
        min=ordered[0],
        q1=median(lower_half or ordered),
        median=median(ordered),
        q3=median(upper_half or ordered),
        max=ordered[-1],
    )
