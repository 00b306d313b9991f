from __future__ import annotations

from dataclasses import dataclass, field

from asciiramp.charsets import Tier
from asciiramp.errors import ConfigurationError


@dataclass(frozen=True)
class Manual:
    """Explicit size; width is halved because every cell is printed twice."""

    width: int
    height: int


@dataclass(frozen=True)
class FitViewportHeight:
    pass


@dataclass(frozen=True)
class FitViewportWidth:
    pass


DimensionMode = Manual | FitViewportHeight | FitViewportWidth


@dataclass(frozen=True)
class Config:
    tier: Tier = Tier.LOW
    invert: bool = False
    mode: DimensionMode = field(default_factory=FitViewportWidth)

    def __post_init__(self):
        tier = self.tier
        if isinstance(tier, str) and not isinstance(tier, Tier):
            tier = tier.lower()
        try:
            object.__setattr__(self, "tier", Tier(tier))
        except ValueError:
            raise ConfigurationError(f"Unknown resolution tier: {self.tier!r}") from None

    @property
    def needs_viewport(self) -> bool:
        return not isinstance(self.mode, Manual)

    @classmethod
    def from_options(
        cls,
        tier: Tier | str = Tier.LOW,
        width: int | None = None,
        height: int | None = None,
        fit_height: bool = False,
        invert: bool = False,
    ) -> Config:
        """Build a config from the flat option set a command line exposes."""
        if width is None and height is None:
            mode = FitViewportHeight() if fit_height else FitViewportWidth()
        elif width is None or height is None:
            raise ConfigurationError("Width and height must be given together")
        elif fit_height:
            raise ConfigurationError("Explicit width/height cannot be combined with fitting the viewport height")
        elif width < 1 or height < 1:
            raise ConfigurationError(f"Width and height must be positive, got {width}x{height}")
        else:
            mode = Manual(width, height)

        return cls(tier=tier, invert=invert, mode=mode)
