# hypergrad/ops/loss.py
import numpy as np
from ..core.edge import Edge
from ..core.errors import ShapeError


class SumElements(Edge):
    """Sum of all entries, as a 1x1 matrix."""
    ARITY = 1

    def as_string(self, var_names):
        return f"sum_elems({var_names[0]})"

    def forward(self, xs):
        return np.full((1, 1), xs[0].sum())

    def backward(self, xs, fx, dEdf, i):
        return np.full_like(xs[0], dEdf[0, 0])


class SquaredEuclideanDistance(Edge):
    """
    ||x_1 - x_2||^2 as a 1x1 matrix.

    Local partials:
      dE/dx_1 =  2 (x_1 - x_2) dE/df
      dE/dx_2 = -2 (x_1 - x_2) dE/df
    """
    ARITY = 2

    def as_string(self, var_names):
        return f"|| {var_names[0]} - {var_names[1]} ||^2"

    def forward(self, xs):
        if xs[0].shape != xs[1].shape:
            raise ShapeError(f"squared_distance: argument shapes differ, {xs[0].shape} vs {xs[1].shape}")
        diff = xs[0] - xs[1]
        return np.full((1, 1), np.sum(diff * diff))

    def backward(self, xs, fx, dEdf, i):
        scale = 2.0 * dEdf[0, 0]
        if i == 1:
            scale = -scale
        return scale * (xs[0] - xs[1])
