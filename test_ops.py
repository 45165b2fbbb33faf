import numpy as np
import pytest
from numpy.testing import assert_allclose

from hypergrad import Dim, Hypergraph, HypergraphConfig, ShapeError, check_gradients
from hypergrad.ops import (
    CwiseMultiply, Difference, Exp, Log, LogisticSigmoid, MatrixMultiply,
    Negate, Rectify, SquaredEuclideanDistance, Sum, SumElements, Tanh,
    Transpose,
)

# Values kept away from 0 so that Log and Rectify are smooth around them
X0 = np.array([[0.7, -1.3], [2.1, 0.4], [-0.6, 1.8]])
POSITIVE = np.abs(X0) + 0.5


def unary_graph(function, value):
    g = Hypergraph(HypergraphConfig(seed=0))
    p = g.add_parameter(Dim(3, 2), "p")
    g.set_value(p, value)
    f = g.add_function(function, [p], "f")
    g.add_function(SumElements, [f], "loss")
    return g, p, f


@pytest.mark.parametrize("function, value, reference", [
    (Exp, X0, np.exp),
    (Log, POSITIVE, np.log),
    (Tanh, X0, np.tanh),
    (LogisticSigmoid, X0, lambda x: 1.0 / (1.0 + np.exp(-x))),
    (Rectify, X0, lambda x: np.maximum(x, 0.0)),
    (Negate, X0, np.negative),
])
def test_unary_forward_and_gradient(function, value, reference):
    g, p, f = unary_graph(function, value)
    loss = g.forward()
    assert_allclose(g.value(f), reference(value), rtol=1e-12)
    assert loss[0, 0] == pytest.approx(reference(value).sum())
    check_gradients(g)


def test_rectify_blocks_negative_inputs():
    g, p, f = unary_graph(Rectify, X0)
    g.forward()
    g.backward()
    assert_allclose(g.gradient(p), (X0 > 0).astype(float))


def test_transpose():
    g = Hypergraph(HypergraphConfig(seed=0))
    p = g.add_parameter(Dim(3, 2), "p")
    t = g.add_function(Transpose, [p], "t")
    c = g.add_input(Dim(2, 3), "c", X0.T * 3.0)
    g.add_function(SquaredEuclideanDistance, [t, c])
    g.forward()
    assert g.value(t).shape == (2, 3)
    check_gradients(g)


def test_binary_elementwise_gradients():
    g = Hypergraph(HypergraphConfig(seed=0))
    a = g.add_parameter(Dim(3, 2), "a")
    b = g.add_parameter(Dim(3, 2), "b")
    g.set_value(a, X0)
    g.set_value(b, POSITIVE)
    d = g.add_function(Difference, [a, b], "d")
    m = g.add_function(CwiseMultiply, [d, b], "m")
    s = g.add_function(Sum, [m, a, d], "s")
    g.add_function(SumElements, [s], "loss")

    g.forward()
    assert_allclose(g.value(d), X0 - POSITIVE)
    assert_allclose(g.value(m), (X0 - POSITIVE) * POSITIVE)
    errors = check_gradients(g)
    assert set(errors) == {a, b}


def test_matrix_multiply_regression():
    g = Hypergraph(HypergraphConfig(seed=3))
    W = g.add_parameter(Dim(2, 3), "W")
    x = g.add_input(Dim(3), "x", [1.0, -2.0, 0.5])
    y = g.add_input(Dim(2), "y", [0.25, -0.75])
    Wx = g.add_function(MatrixMultiply, [W, x], "Wx")
    g.add_function(SquaredEuclideanDistance, [Wx, y], "loss")

    g.forward()
    assert g.value(Wx).shape == (2, 1)
    # the input gradient is computed too, even though an optimizer ignores it
    check_gradients(g, indices=[W, x])

    g.backward()
    residual = g.value(Wx) - g.value(y)
    assert_allclose(g.gradient(W), 2.0 * residual @ g.value(x).T)


def test_squared_distance_value():
    g = Hypergraph()
    a = g.add_input(Dim(2), "a", [1.0, 2.0])
    b = g.add_input(Dim(2), "b", [4.0, -2.0])
    g.add_function(SquaredEuclideanDistance, [a, b])
    assert g.forward()[0, 0] == pytest.approx(25.0)


def test_elementwise_shape_mismatch():
    g = Hypergraph()
    a = g.add_input(Dim(2), "a")
    b = g.add_input(Dim(3), "b")
    g.add_function(Sum, [a, b])
    with pytest.raises(ShapeError):
        g.forward()


def test_as_string():
    assert Sum().as_string(["a", "b", "c"]) == "a + b + c"
    assert MatrixMultiply().as_string(["W", "x"]) == "W * x"
    assert Tanh().as_string(["h"]) == "tanh(h)"
    assert SquaredEuclideanDistance().as_string(["y", "t"]) == "|| y - t ||^2"
