# hypergrad/core/dim.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from .errors import ShapeError

# Default magnitude of random initialisation (small, to avoid early saturation)
DEFAULT_INIT_SCALE = 0.08


@dataclass(frozen=True)
class Dim:
    """
    Shape of a dense 2-D matrix.

    Dim()      -> 1x1
    Dim(m)     -> m x 1 (column vector)
    Dim(m, n)  -> m x n

    `a * b` is the shape of the matrix product and requires a.cols == b.rows.
    """
    rows: int = 1
    cols: int = 1

    def __post_init__(self):
        for extent in (self.rows, self.cols):
            if isinstance(extent, bool) or not isinstance(extent, (int, np.integer)) or extent < 1:
                raise ShapeError(f"Dim extents must be positive integers, got ({self.rows!r}, {self.cols!r})")

    def transpose(self) -> "Dim":
        return Dim(self.cols, self.rows)

    @property
    def shape(self):
        """numpy shape tuple."""
        return (int(self.rows), int(self.cols))

    @property
    def size(self) -> int:
        return int(self.rows) * int(self.cols)

    def __mul__(self, other: "Dim") -> "Dim":
        if not isinstance(other, Dim):
            return NotImplemented
        if self.cols != other.rows:
            raise ShapeError(f"cannot multiply {self} by {other}: {self.cols} != {other.rows}")
        return Dim(self.rows, other.cols)

    def __str__(self):
        return f"({self.rows},{self.cols})"

    @classmethod
    def of(cls, matrix: np.ndarray) -> "Dim":
        """Dim of an existing 2-D array."""
        if np.ndim(matrix) != 2:
            raise ShapeError(f"expected a 2-D matrix, got shape {np.shape(matrix)}")
        return cls(*matrix.shape)


def multiply(a: Dim, b: Dim) -> Dim:
    """Shape of a @ b; raises ShapeError unless a.cols == b.rows."""
    return a * b


def zero(d: Dim) -> np.ndarray:
    return np.zeros(d.shape, dtype=np.float64)


def random(d: Dim, scale: float = DEFAULT_INIT_SCALE,
           rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Uniform on [-1, 1], scaled by `scale`."""
    rng = rng if rng is not None else np.random.default_rng()
    return rng.uniform(-1.0, 1.0, size=d.shape) * scale


def as_matrix(value: Any, d: Optional[Dim] = None) -> np.ndarray:
    """
    Convert a caller-supplied value to a float64 2-D matrix.

    Python/numpy scalars become 1x1, 1-D sequences become column vectors.
    If `d` is given the result must have exactly that shape.
    """
    m = np.array(value, dtype=np.float64)
    if m.ndim == 0:
        m = m.reshape(1, 1)
    elif m.ndim == 1:
        m = m.reshape(-1, 1)
    elif m.ndim != 2:
        raise ShapeError(f"expected at most 2 dimensions, got shape {m.shape}")
    if d is not None and m.shape != d.shape:
        raise ShapeError(f"value of shape {m.shape} does not match {d}")
    return m
