"""Tone mapping from unbounded light intensities to 8-bit channel values.

Light is accumulated as a float per channel, from 0 (no light) upward with
no upper bound. An 8-bit image can only hold [0, 255] per channel, so each
channel is mapped to [0, 1] and scaled by 255.

The default method is a hard clip: values are clamped to [0, 1] *before*
scaling, so anything brighter than 1.0 saturates to 255 and highlights can
look flat. This is the intended simple mapping. The compressive curves are
available for scenes that need highlight detail:

    CLIP      c -> clamp(c, 0, 1)
    REINHARD  c -> c / (1 + c)
    EXPOSURE  c -> 1 - exp(-c * exposure)

Example:
    >>> from raycaster.core.tonemap import ToneMapMethod, parse_tone_map
    >>> parse_tone_map("reinhard") is ToneMapMethod.REINHARD
    True
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from raycaster.core.vector import vec3

# Largest value of an 8-bit channel
CHANNEL_MAX = 255.0


class ToneMapMethod(IntEnum):
    """Tone mapping curves selectable for a render."""

    CLIP = 0
    REINHARD = 1
    EXPOSURE = 2


def parse_tone_map(name: str | ToneMapMethod) -> ToneMapMethod:
    """Resolve a tone map given by name (case-insensitive) or enum value.

    Raises:
        ValueError: If the name is not a known method.
    """
    if isinstance(name, ToneMapMethod):
        return name
    try:
        return ToneMapMethod[str(name).upper()]
    except KeyError:
        valid = ", ".join(m.name.lower() for m in ToneMapMethod)
        raise ValueError(f"Unknown tone map {name!r} (expected one of: {valid})") from None


@ti.func
def tone_map_channel(value: ti.f32, method: ti.i32, exposure: ti.f32) -> ti.f32:
    """Map one light-space channel into [0, 1].

    Args:
        value: Light intensity of the channel (any real number).
        method: A ToneMapMethod value.
        exposure: Exposure factor, only used by EXPOSURE.

    Returns:
        The display value in [0, 1].
    """
    mapped = value
    if method == int(ToneMapMethod.REINHARD):
        v = ti.max(value, 0.0)
        mapped = v / (1.0 + v)
    elif method == int(ToneMapMethod.EXPOSURE):
        v = ti.max(value, 0.0)
        mapped = 1.0 - ti.exp(-v * exposure)
    return tm.clamp(mapped, 0.0, 1.0)


@ti.func
def light_to_rgb(color: vec3, method: ti.i32, exposure: ti.f32) -> vec3:
    """Convert a light-space color into 0-255 channel values.

    Channels are clamped before they are scaled, so the result can be cast
    straight to an 8-bit integer (the cast truncates).
    """
    result = vec3(0.0, 0.0, 0.0)
    for c in ti.static(range(3)):
        result[c] = tone_map_channel(color[c], method, exposure) * CHANNEL_MAX
    return result
