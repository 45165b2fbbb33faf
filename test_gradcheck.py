import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from hypergrad import (
    Dim, Edge, GradientCheckError, Hypergraph, HypergraphConfig,
    check_gradients, numeric_gradient,
)
from hypergrad.ops import CwiseMultiply, LogisticSigmoid, MatrixMultiply, SumElements, Tanh


class WrongSquare(Edge):
    """x^2 with a deliberately wrong derivative (x instead of 2x)."""
    ARITY = 1

    def as_string(self, var_names):
        return f"{var_names[0]}^2"

    def forward(self, xs):
        return xs[0] * xs[0]

    def backward(self, xs, fx, dEdf, i):
        return dEdf * xs[0]


def test_scalar_chain_matches_central_difference():
    # z = sigmoid(tanh(w * x))
    g = Hypergraph(HypergraphConfig(seed=5))
    x = g.add_input(Dim(), "x", 1.7)
    w = g.add_parameter(Dim(), "w")
    wx = g.add_function(MatrixMultiply, [w, x])
    t = g.add_function(Tanh, [wx])
    g.add_function(LogisticSigmoid, [t])

    g.forward()
    g.backward()
    analytic = g.gradient(w).copy()
    numeric = numeric_gradient(g, w)
    assert_allclose(analytic, numeric, atol=1e-4)


def test_numeric_gradient_restores_value():
    g = Hypergraph(HypergraphConfig(seed=2))
    p = g.add_parameter(Dim(2, 2), "p")
    g.add_function(Tanh, [p])
    before = g.edges[p].value.copy()
    with pytest.warns(RuntimeWarning):
        g.forward()
        g.backward()
    numeric_gradient(g, p)
    assert_array_equal(g.edges[p].value, before)
    # values are fresh again
    g.value(p)


def test_check_gradients_reports_errors():
    g = Hypergraph(HypergraphConfig(seed=4))
    a = g.add_parameter(Dim(2), "a")
    b = g.add_parameter(Dim(2), "b")
    m = g.add_function(CwiseMultiply, [a, b])
    g.add_function(SumElements, [m])
    errors = check_gradients(g)
    assert set(errors) == {a, b}
    assert all(e < 1e-6 for e in errors.values())
    # both values and gradients are usable afterwards
    g.gradient(a)


def test_check_gradients_catches_wrong_backward():
    g = Hypergraph()
    p = g.add_parameter(Dim(), "p")
    g.set_value(p, 1.5)
    g.add_function(WrongSquare, [p])
    with pytest.raises(GradientCheckError):
        check_gradients(g)


def test_numeric_gradient_rejects_computed_nodes():
    g = Hypergraph()
    p = g.add_parameter(Dim(), "p")
    t = g.add_function(Tanh, [p])
    with pytest.raises(TypeError):
        numeric_gradient(g, t)
