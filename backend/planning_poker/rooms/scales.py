"""Estimation scales a room can vote with."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EstimationScale:
    """One fixed deck of estimate tokens."""

    scale_id: str
    label: str
    values: tuple[str, ...]
    description: str

    def allows(self, token: str) -> bool:
        return token in self.values


SCALES: dict[str, EstimationScale] = {
    "fibonacci": EstimationScale(
        scale_id="fibonacci",
        label="Fibonacci",
        values=("0", "1", "2", "3", "5", "8", "13", "21", "?"),
        description="Classic Fibonacci sequence often used for effort sizing.",
    ),
    "tshirt": EstimationScale(
        scale_id="tshirt",
        label="T-Shirt Sizes",
        values=("XS", "S", "M", "L", "XL", "XXL", "?"),
        description="Simple sizing using T-shirt sizes for rough estimates.",
    ),
}

DEFAULT_SCALE_ID = "fibonacci"


def is_registered_scale(scale_id: str) -> bool:
    return scale_id in SCALES


def get_scale(scale_id: str) -> EstimationScale | None:
    """Return the scale for scale_id, or None when it is not registered."""
    return SCALES.get(scale_id)


def list_scales() -> list[EstimationScale]:
    return list(SCALES.values())


__all__ = [
    "DEFAULT_SCALE_ID",
    "EstimationScale",
    "SCALES",
    "get_scale",
    "is_registered_scale",
    "list_scales",
]
