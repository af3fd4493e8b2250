# src/rosetta/content/config.py

from dataclasses import dataclass


@dataclass(frozen=True)
class StructuringConfig:
    """Configuration for the structuring passes and the validator.

    Immutable. Explicit. No magic defaults from environment.
    """

    first_image_background: bool = True  # First image without a role prefix
    background_heading_radius: int = 2  # Positions scanned around a background image

    def __post_init__(self) -> None:
        if self.background_heading_radius < 0:
            raise ValueError("background_heading_radius must be >= 0")


DEFAULT_CONFIG = StructuringConfig()
