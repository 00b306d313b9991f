from enum import Enum


class Tier(str, Enum):
    """How many brightness levels the glyph ramp distinguishes."""

    LOW = "low"
    MID = "mid"
    HIGH = "high"


# Dark to light, for terminals with a dark background
LOW = " .+#@"
MID = " .,:+*#%@"
HIGH = " .,:;~+?txXCmo#%@"

RAMPS = {
    Tier.LOW: LOW,
    Tier.MID: MID,
    Tier.HIGH: HIGH,
}


def get_ramp(tier: Tier, invert: bool = False) -> str:
    """Return the glyph ramp for a tier, reversed for light backgrounds."""
    ramp = RAMPS[Tier(tier)]
    return ramp[::-1] if invert else ramp
