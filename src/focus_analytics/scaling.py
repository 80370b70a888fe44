"""
Axis scaling for Focus Analytics charts.

PURPOSE: Pick a "nice" axis maximum and tick values for a bucket series.
AI CONTEXT: Pure data processing - no rendering, no I/O.

SCALING POLICIES:
1. fixed: Caller-supplied cap, step from a two-row table (daily hour chart)
2. dynamic: Tick table for line charts (peak hour / peak weekday)
3. bar: Round-up plus 20% headroom for bar-distribution charts

The dynamic and bar policies look alike but produce visibly different axes
and both are relied upon, so they stay separate.

GUARANTEE:
For every policy, axis_max >= max(magnitudes).

USAGE:
    scale = scale_distribution([12.0, 40.5, 3.0], mode="dynamic")
    scale.axis_max   # 60
    scale.ticks      # [0, 15, 30, 45, 60]
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .config import Config
from .models import AxisScale

__all__ = [
    "SCALE_MODES",
    "SERIES_SCALE_POLICY",
    "fixed_scale",
    "line_chart_scale",
    "bar_chart_scale",
    "scale_distribution",
    "scale_series",
]

SCALE_MODES: tuple[str, ...] = ("fixed", "dynamic", "bar")

# Series kind -> scaling policy. Renderers pass the kind explicitly.
SERIES_SCALE_POLICY: dict[str, str] = {
    "daily": "fixed",
    "weekly": "bar",
    "monthly": "bar",
    "yearly": "bar",
    "peak_hour": "dynamic",
    "peak_weekday": "dynamic",
}


def _ceil_to(value: float, multiple: int) -> int:
    """Round value up to the next multiple."""
    return int(math.ceil(value / multiple)) * multiple


def _observed_max(magnitudes: Sequence[float]) -> float:
    """Largest magnitude, or 0 for an empty series."""
    return max(magnitudes, default=0)


def fixed_scale(magnitudes: Sequence[float], cap: int = Config.DAILY_AXIS_MAX) -> AxisScale:
    """
    Scale an axis from a caller-supplied cap.

    Step table: cap >= 25 gives step 10 and max 60, otherwise step 5 and
    max 25. If a magnitude exceeds the table's maximum the axis is extended
    to the next multiple of the step so nothing is clipped.

    Ticks always end on axis_max. For the 60-minute row that is seven
    ticks (0-60); the timer app's axis drew six labels at i * step and so
    stopped at 50 while bars were still scaled against 60, leaving the top
    gridline unlabelled.

    Args:
        magnitudes: Bucket values.
        cap: Caller's fixed axis cap. Default: 60 minutes per hour.

    Returns:
        AxisScale with ticks every step from 0 to axis_max.

    Example:
        >>> fixed_scale([10, 42]).ticks
        [0, 10, 20, 30, 40, 50, 60]
    """
    if cap >= 25:
        step, axis_max = 10, 60
    else:
        step, axis_max = 5, 25

    observed = _observed_max(magnitudes)
    if observed > axis_max:
        axis_max = _ceil_to(observed, step)

    return AxisScale(axis_max=axis_max, ticks=list(range(0, axis_max + 1, step)))


def line_chart_scale(magnitudes: Sequence[float]) -> AxisScale:
    """
    Scale a line/trend chart axis with the tick-table rule.

    Rules on raw = max(magnitudes, 1):
    - raw <= 15: ticks [0, 5, 10, 15]
    - raw <= 25: ticks [0, 5, ..., 25]
    - otherwise: step = max(5, ceil(ceil(raw / 4) / 5) * 5), five ticks
      0..4 * step

    Args:
        magnitudes: Non-negative bucket values.

    Returns:
        AxisScale whose top tick is axis_max.

    Example:
        >>> line_chart_scale([8.57]).ticks
        [0, 5, 10, 15]
        >>> line_chart_scale([41]).ticks
        [0, 15, 30, 45, 60]
    """
    raw = max(_observed_max(magnitudes), 1)

    if raw <= 15:
        return AxisScale(axis_max=15, ticks=[0, 5, 10, 15])
    if raw <= 25:
        return AxisScale(axis_max=25, ticks=[0, 5, 10, 15, 20, 25])

    tick_count = 5
    step = max(5, _ceil_to(math.ceil(raw / (tick_count - 1)), 5))
    return AxisScale(
        axis_max=step * (tick_count - 1),
        ticks=[i * step for i in range(tick_count)],
    )


def bar_chart_scale(
    magnitudes: Sequence[float],
    min_scale: int = Config.BAR_MIN_SCALE,
) -> AxisScale:
    """
    Scale a bar-distribution chart axis with the headroom rule.

    The observed max (at least 1) is rounded up to the nearest 10, floored
    at min_scale, or to the nearest 20 above 50. The result is inflated by
    20% and rounded up to the nearest 10. Ticks are six evenly spaced values
    from 0 to axis_max.

    Args:
        magnitudes: Non-negative bucket values.
        min_scale: Smallest pre-headroom maximum. Default: 20.

    Returns:
        AxisScale with six ticks.

    Example:
        >>> bar_chart_scale([45]).axis_max
        60
        >>> bar_chart_scale([130]).axis_max
        170
    """
    raw = max(_observed_max(magnitudes), 1)

    if raw <= 50:
        scale = max(_ceil_to(raw, 10), min_scale)
    else:
        scale = _ceil_to(raw, 20)

    # 20% headroom in integer arithmetic: ceil(scale * 1.2 / 10) * 10
    axis_max = -(-scale * 12 // 100) * 10
    step = axis_max / 5
    return AxisScale(axis_max=axis_max, ticks=[round(i * step) for i in range(6)])


def scale_distribution(
    magnitudes: Sequence[float],
    mode: str = "dynamic",
    cap: int = Config.DAILY_AXIS_MAX,
) -> AxisScale:
    """
    Scale an axis with a named policy.

    Args:
        magnitudes: Bucket values.
        mode: "fixed", "dynamic" or "bar".
        cap: Axis cap for fixed mode; ignored otherwise.

    Returns:
        AxisScale from the selected policy.

    Raises:
        ValueError: If mode is not one of SCALE_MODES.
    """
    if mode == "fixed":
        return fixed_scale(magnitudes, cap)
    if mode == "dynamic":
        return line_chart_scale(magnitudes)
    if mode == "bar":
        return bar_chart_scale(magnitudes)
    raise ValueError(f"Unknown scale mode: {mode!r}")


def scale_series(kind: str, magnitudes: Sequence[float]) -> AxisScale:
    """
    Scale a series using the policy registered for its kind.

    Args:
        kind: Key of SERIES_SCALE_POLICY (e.g. "daily", "weekly").
        magnitudes: Bucket values.

    Raises:
        ValueError: If kind is unknown.
    """
    try:
        mode = SERIES_SCALE_POLICY[kind]
    except KeyError:
        raise ValueError(f"Unknown series kind: {kind!r}") from None
    return scale_distribution(magnitudes, mode)
