# hypergrad/ops/arithmetic.py
from ..core.dim import Dim
from ..core.edge import Edge
from ..core.errors import ShapeError


def _same_shape(xs, tag):
    """All arguments of an elementwise function must share one shape."""
    shape = xs[0].shape
    for x in xs[1:]:
        if x.shape != shape:
            raise ShapeError(f"{tag}: argument shapes differ, {shape} vs {x.shape}")


class Sum(Edge):
    """x_1 + x_2 + ... + x_n (any number of equally shaped arguments)."""

    def as_string(self, var_names):
        return " + ".join(var_names)

    def forward(self, xs):
        _same_shape(xs, "sum")
        out = xs[0].copy()
        for x in xs[1:]:
            out += x
        return out

    def backward(self, xs, fx, dEdf, i):
        return dEdf.copy()


class Difference(Edge):
    """x_1 - x_2"""
    ARITY = 2

    def as_string(self, var_names):
        return f"{var_names[0]} - {var_names[1]}"

    def forward(self, xs):
        _same_shape(xs, "difference")
        return xs[0] - xs[1]

    def backward(self, xs, fx, dEdf, i):
        return dEdf.copy() if i == 0 else -dEdf


class Negate(Edge):
    ARITY = 1

    def as_string(self, var_names):
        return f"-{var_names[0]}"

    def forward(self, xs):
        return -xs[0]

    def backward(self, xs, fx, dEdf, i):
        return -dEdf


class CwiseMultiply(Edge):
    """Elementwise (Hadamard) product x_1 * x_2."""
    ARITY = 2

    def as_string(self, var_names):
        return f"{var_names[0]} ⊙ {var_names[1]}"

    def forward(self, xs):
        _same_shape(xs, "cwise_multiply")
        return xs[0] * xs[1]

    def backward(self, xs, fx, dEdf, i):
        # d(a*b)/da = b, d(a*b)/db = a
        return dEdf * xs[1 - i]


class MatrixMultiply(Edge):
    """
    Matrix product x_1 @ x_2.

    Local partials:
      dE/dx_1 = dE/df @ x_2^T
      dE/dx_2 = x_1^T @ dE/df
    """
    ARITY = 2

    def as_string(self, var_names):
        return f"{var_names[0]} * {var_names[1]}"

    def forward(self, xs):
        Dim.of(xs[0]) * Dim.of(xs[1])  # raises ShapeError on mismatch
        return xs[0] @ xs[1]

    def backward(self, xs, fx, dEdf, i):
        if i == 0:
            return dEdf @ xs[1].T
        return xs[0].T @ dEdf


class Transpose(Edge):
    ARITY = 1

    def as_string(self, var_names):
        return f"{var_names[0]}^T"

    def forward(self, xs):
        return xs[0].T.copy()

    def backward(self, xs, fx, dEdf, i):
        return dEdf.T.copy()
