"""
Threshold range construction in full-range HSV.

Hue is circular, so a band centred near 0 or 255 does not fit into one
`cv2.inRange` call. Such bands come back as a `SplitRange` with two
segments; everything else is a `SingleRange`.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from .color_model import HUE_PERIOD, MAX_CHANNEL, MAX_HUE


@dataclass(frozen=True)
class HsvBounds:
    """Inclusive lower/upper (h, s, v) bounds."""
    lower: Tuple[int, int, int]
    upper: Tuple[int, int, int]


@dataclass(frozen=True)
class SingleRange:
    """Band that needs no wrap-around."""
    bounds: HsvBounds
    primary: HsvBounds  # unwrapped band, hue may exceed [0, 255]

    @property
    def segments(self) -> Tuple[HsvBounds, ...]:
        return (self.bounds,)


@dataclass(frozen=True)
class SplitRange:
    """Band crossing the hue wrap point: [0, a] and [b, 255]."""
    low: HsvBounds
    high: HsvBounds
    primary: HsvBounds

    @property
    def segments(self) -> Tuple[HsvBounds, ...]:
        return (self.low, self.high)


HueRange = Union[SingleRange, SplitRange]


def _clamp(value: int, low: int = 0, high: int = MAX_CHANNEL) -> int:
    return max(low, min(high, value))


def build_hue_range(
    hsv_color: Sequence[int],
    hue_spread: int,
    saturation_spread: int,
    value_bounds: Tuple[int, int] = (30, MAX_CHANNEL),
) -> HueRange:
    """
    Derive the threshold band around a reference color.

    Args:
        hsv_color: reference (h, s, v), full-range HSV
        hue_spread: half-width of the hue band
        saturation_spread: half-width of the saturation band
        value_bounds: fixed (min, max) value bounds

    Returns:
        SingleRange, or SplitRange when h - spread < 0 or h + spread > 255
    """
    h, s = int(hsv_color[0]), int(hsv_color[1])
    hue_spread, saturation_spread = int(hue_spread), int(saturation_spread)

    s_low = _clamp(s - saturation_spread)
    s_high = _clamp(s + saturation_spread)
    v_low = _clamp(int(value_bounds[0]))
    v_high = _clamp(int(value_bounds[1]))

    lower_hue = h - hue_spread
    upper_hue = h + hue_spread
    primary = HsvBounds((lower_hue, s_low, v_low), (upper_hue, s_high, v_high))

    if upper_hue - lower_hue + 1 >= HUE_PERIOD:
        full = HsvBounds((0, s_low, v_low), (MAX_HUE, s_high, v_high))
        return SingleRange(bounds=full, primary=primary)

    if lower_hue < 0:
        return SplitRange(
            low=HsvBounds((0, s_low, v_low), (upper_hue, s_high, v_high)),
            high=HsvBounds((HUE_PERIOD + lower_hue, s_low, v_low), (MAX_HUE, s_high, v_high)),
            primary=primary,
        )
    if upper_hue > MAX_HUE:
        return SplitRange(
            low=HsvBounds((0, s_low, v_low), (upper_hue - HUE_PERIOD, s_high, v_high)),
            high=HsvBounds((lower_hue, s_low, v_low), (MAX_HUE, s_high, v_high)),
            primary=primary,
        )
    return SingleRange(bounds=primary, primary=primary)
