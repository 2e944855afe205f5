"""Colour palette used across the game, as RGB floats in the 0..1 range."""

OFF_WHITE = (0.925, 0.976, 0.988)
LIGHT_BLUE = (0.776, 0.859, 0.902)
BLUE = (0.176, 0.38, 0.639)
DARK_BLUE = (0.188, 0.208, 0.278)
LIGHT_BROWN = (0.612, 0.529, 0.463)
ORANGE = (0.863, 0.612, 0.098)


def to_rgb255(color):
    """Convert an RGB or RGBA float colour to an 8-bit RGB tuple."""
    channels = tuple(color)
    if len(channels) not in (3, 4):
        raise ValueError(f"expected 3 or 4 channels, got {len(channels)}")
    for channel in channels:
        if not 0.0 <= channel <= 1.0:
            raise ValueError(f"channel value {channel!r} is outside 0..1")
    return tuple(round(channel * 255) for channel in channels[:3])