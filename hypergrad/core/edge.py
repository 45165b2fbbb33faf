# hypergrad/core/edge.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import numpy as np

from .dim import Dim, as_matrix
from .errors import GraphIndexError


class Edge(ABC):
    """
    A function of zero or more argument nodes producing exactly one node.

    Attributes
    ----------
    head_node : int
        Index of the node that holds f(x_1, ..., x_n). Set by the Hypergraph.
    tail : List[int]
        Indices of the argument nodes, in argument order. Every entry is
        strictly smaller than `head_node`.
    ARITY : Optional[int]
        Number of arguments a subclass accepts; None means any number >= 1.

    Subclasses implement `forward`, `backward` and `as_string`. Functions with
    zero arguments are constants, inputs or trainable parameters.
    """

    ARITY: Optional[int] = None

    def __init__(self):
        self.head_node: Optional[int] = None
        self.tail: List[int] = []

    @property
    def arity(self) -> int:
        return len(self.tail)

    @property
    def attached(self) -> bool:
        return self.head_node is not None

    # debugging
    @abstractmethod
    def as_string(self, var_names: Sequence[str]) -> str:
        """Render f(x_1, ..., x_n) given the names of the tail nodes."""

    # computation
    @abstractmethod
    def forward(self, xs: Sequence[np.ndarray]) -> np.ndarray:
        """f(xs). Must not modify `xs`."""

    @abstractmethod
    def backward(self, xs: Sequence[np.ndarray], fx: np.ndarray,
                 dEdf: np.ndarray, i: int) -> np.ndarray:
        """
        dE/dxs[i], given the forward result fx = f(xs) and dE/df = dEdf.
        The result has the shape of xs[i].
        """

    def has_trainable_parameters(self) -> bool:
        return False

    def __repr__(self):
        return f"{type(self).__name__}(head={self.head_node}, tail={self.tail})"


class LeafEdge(Edge):
    """
    Zero-argument function whose value is held by the edge itself.

    `value` is read by forward() on every pass and is replaced through
    Hypergraph.set_value().
    """

    ARITY = 0

    def __init__(self, dim: Dim, value: np.ndarray):
        super().__init__()
        self.dim = dim
        self.value = as_matrix(value, dim)

    def forward(self, xs):
        # Copy, so that callers mutating a cached node value cannot alter the leaf
        return self.value.copy()

    def backward(self, xs, fx, dEdf, i):
        raise GraphIndexError(f"{type(self).__name__} has no argument {i}")


class InputEdge(LeafEdge):
    """Externally supplied value, treated as a constant by differentiation."""

    def as_string(self, var_names):
        return f"input{self.dim}"


class ParameterEdge(LeafEdge):
    """Trainable weights; their gradient is left on the head node for an optimizer."""

    def as_string(self, var_names):
        return f"parameter{self.dim}"

    def has_trainable_parameters(self) -> bool:
        return True
