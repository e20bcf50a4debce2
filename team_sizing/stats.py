"""Summary statistics over revealed estimate values."""

import statistics
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Sequence, Union

Number = Union[int, float]

EMPTY_STATS: Dict[str, Number] = {"average": 0, "median": 0, "mode": 0}


def round_half_up(value: float, places: int = 1) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def calculate_stats(values: Sequence[int]) -> Dict[str, Number]:
    """
    Average, median and mode of estimate values.

    - average: arithmetic mean rounded half-up to one decimal.
    - median: middle value for an odd count, mean of the two middle values otherwise.
    - mode: most frequent value; ties go to the smallest value.

    Returns the zero sentinel for an empty sequence.
    """
    if not values:
        return dict(EMPTY_STATS)

    ordered = sorted(values)
    average = round_half_up(sum(ordered) / len(ordered))
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        median: Number = (ordered[mid - 1] + ordered[mid]) / 2
    else:
        median = ordered[mid]
    # statistics.mode returns the first mode encountered, so scanning the
    # sorted values makes the smallest tied value win.
    mode = statistics.mode(ordered)

    return {"average": average, "median": median, "mode": mode}


def format_summary(stats: Dict[str, Number]) -> str:
    return "\n".join([
        f"Average: {stats['average']}",
        f"Median: {stats['median']}",
        f"Mode: {stats['mode']}",
    ])
