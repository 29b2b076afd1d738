from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterator, Sequence, Union

import numpy as np


@dataclass(frozen=True)
class Point:
    """Immutable point in D-dimensional space."""
    coordinates: tuple[float, ...]

    def __post_init__(self) -> None:
        coords = tuple(float(c) for c in self.coordinates)
        if not all(math.isfinite(c) for c in coords):
            raise ValueError(f"Point coordinates must be finite: {coords}")
        object.__setattr__(self, "coordinates", coords)

    @property
    def dimension(self) -> int:
        return len(self.coordinates)

    def __len__(self) -> int:
        return len(self.coordinates)

    def __iter__(self) -> Iterator[float]:
        return iter(self.coordinates)

    def __getitem__(self, index: int) -> float:
        return self.coordinates[index]

    def as_array(self) -> np.ndarray:
        return np.array(self.coordinates, dtype=float)


@dataclass(frozen=True)
class Measurement:
    """
    The unknown position is believed to be `distance` away from `anchor`.
    """
    anchor: Point
    distance: float

    def __init__(self, anchor: Union[Point, Sequence[float]], distance: float) -> None:
        if not isinstance(anchor, Point):
            anchor = Point(tuple(anchor))
        distance = float(distance)
        if not math.isfinite(distance) or distance < 0.0:
            raise ValueError(f"Measurement distance must be finite and >= 0, got {distance}")
        object.__setattr__(self, "anchor", anchor)
        object.__setattr__(self, "distance", distance)
