# hypergrad/core/gradcheck.py
"""
Central-difference gradient checks for a Hypergraph.

For a leaf node with value v, each element is bumped both ways:

    dE/dv[k] ≈ [E(v + eps·e_k) - E(v - eps·e_k)] / (2·eps)

where E is the sum of the output node's entries (the same convention
backward() uses when it seeds the output with ones). Two forward passes per
element, so only meant for small graphs and tests.
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable, Optional

import numpy as np

from .edge import LeafEdge
from .errors import GradientCheckError

logger = logging.getLogger(__name__)


def numeric_gradient(graph, index: int, eps: Optional[float] = None) -> np.ndarray:
    """
    Finite-difference dE/dv for the input or parameter leaf at `index`.

    The leaf's value is restored afterwards and one final forward() leaves the
    graph's cached values fresh.
    """
    eps = graph.config.gradcheck_eps if eps is None else eps
    edge = graph.edges[graph._check_index(index)]
    if not isinstance(edge, LeafEdge):
        raise TypeError(f"node {index} is not an input or parameter")

    base = edge.value.copy()
    grad = np.zeros_like(base)
    try:
        for k in np.ndindex(base.shape):
            bumped = base.copy()
            bumped[k] = base[k] + eps
            graph.set_value(index, bumped)
            E_plus = float(np.sum(graph.forward()))

            bumped[k] = base[k] - eps
            graph.set_value(index, bumped)
            E_minus = float(np.sum(graph.forward()))

            grad[k] = (E_plus - E_minus) / (2.0 * eps)
    finally:
        graph.set_value(index, base)
    graph.forward()
    return grad


def check_gradients(graph, indices: Optional[Iterable[int]] = None,
                    eps: Optional[float] = None, tol: Optional[float] = None) -> Dict[int, float]:
    """
    Compare backward() against numeric_gradient() for every parameter
    (or for the given leaf indices).

    Returns
    -------
    dict {node index: max absolute error}

    Raises GradientCheckError if any error exceeds tol * max(1, |analytic|_max).
    """
    tol = graph.config.gradcheck_tol if tol is None else tol
    indices = graph.parameters() if indices is None else list(indices)

    graph.forward()
    graph.backward()
    analytic = {i: graph.gradient(i).copy() for i in indices}

    errors: Dict[int, float] = {}
    failed = []
    for i in indices:
        numeric = numeric_gradient(graph, i, eps)
        err = float(np.max(np.abs(analytic[i] - numeric)))
        errors[i] = err
        bound = tol * max(1.0, float(np.max(np.abs(analytic[i]))))
        logger.debug("gradcheck node %d (%s): max error %.3e (bound %.1e)",
                     i, graph.nodes[i].variable_name, err, bound)
        if err > bound:
            failed.append(f"{graph.nodes[i].variable_name} (node {i}): {err:.3e} > {bound:.1e}")

    # leave both values and gradients fresh for the caller
    graph.backward()

    if failed:
        raise GradientCheckError("gradient check failed for " + "; ".join(failed))
    return errors
