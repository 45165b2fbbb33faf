# hypergrad/core/graph.py
"""
Computation hypergraph: nodes are forward/backward values, edges are functions
of several values. An edge has a single head (its result) and 0, 1, 2 or more
tails (its arguments). Inputs and parameters are functions of 0 arguments.

Example: for z = f(x, y), z, x and y are nodes, and the edge for f has z as
its head and (x, y) as its tail.

Nodes and edges are stored in two index-aligned lists; node i is produced by
edge i and every tail index of edge i is < i, so construction order is a
topological order and neither pass needs a sort.
"""
from __future__ import annotations
import logging
import warnings
from typing import Any, Iterable, List, Optional, Type, Union

import numpy as np

from .config import HypergraphConfig
from .dim import Dim, as_matrix, random, zero
from .edge import Edge, InputEdge, LeafEdge, ParameterEdge
from .errors import ArityError, CallOrderError, GraphIndexError, ShapeError
from .node import Node

logger = logging.getLogger(__name__)


def _as_dim(d: Union[Dim, int, tuple]) -> Dim:
    if isinstance(d, Dim):
        return d
    if isinstance(d, tuple):
        return Dim(*d)
    return Dim(d)


class Hypergraph:
    """
    Owns every Node and Edge, builds the graph and runs forward/backward.

    The last node added is the output (normally a 1x1 loss). Cached values are
    "fresh" after forward() and become stale again after any construction
    operation or set_value(); backward() refuses to run on stale values.
    """

    def __init__(self, config: Optional[HypergraphConfig] = None):
        self.config = config or HypergraphConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.nodes: List[Node] = []   # **stored in topological order**
        self.edges: List[Edge] = []
        self._values_fresh = False
        self._gradients_fresh = False

    def __len__(self):
        return len(self.nodes)

    @property
    def output(self) -> int:
        """Index of the output node (the last one added)."""
        if not self.nodes:
            raise CallOrderError("the graph is empty")
        return len(self.nodes) - 1

    # ------------------------------------------------------------------ #
    # construction
    # ------------------------------------------------------------------ #
    def add_parameter(self, d: Union[Dim, int, tuple], name: str = "") -> int:
        """Add trainable weights of shape `d`, randomly initialised."""
        d = _as_dim(d)
        edge = ParameterEdge(d, random(d, self.config.init_scale, self.rng))
        return self._append(edge, (), name)

    def add_input(self, d: Union[Dim, int, tuple], name: str = "", value: Any = None) -> int:
        """Add an externally supplied constant of shape `d` (zero unless `value` is given)."""
        d = _as_dim(d)
        edge = InputEdge(d, zero(d) if value is None else value)
        return self._append(edge, (), name)

    def add_function(self, function: Union[Type[Edge], Edge],
                     arguments: Iterable[int], name: str = "") -> int:
        """
        Add f(arguments) and return the index of its result node.

        `function` is either an Edge subclass (instantiated with no arguments)
        or a ready-made, not yet attached, Edge instance for functions that
        carry settings of their own.
        """
        if isinstance(function, type) and issubclass(function, Edge):
            edge = function()
        elif isinstance(function, Edge):
            edge = function
        else:
            raise TypeError(f"expected an Edge subclass or instance, got {function!r}")
        return self._append(edge, arguments, name)

    def _append(self, edge: Edge, arguments: Iterable[int], name: str) -> int:
        if edge.attached:
            raise TypeError(f"{edge!r} already belongs to a graph")
        new_node_index = len(self.nodes)
        new_edge_index = len(self.edges)
        tail = list(arguments)

        expected = edge.ARITY
        if expected is None and not tail:
            raise ArityError(f"{type(edge).__name__} needs at least one argument")
        if expected is not None and len(tail) != expected:
            raise ArityError(f"{type(edge).__name__} takes {expected} argument(s), got {len(tail)}")
        for ni in tail:
            if isinstance(ni, bool) or not isinstance(ni, (int, np.integer)):
                raise GraphIndexError(f"argument {ni!r} is not a node index")
            if not 0 <= ni < new_node_index:
                raise GraphIndexError(
                    f"argument {ni} must refer to an existing node (0 <= index < {new_node_index})")

        self.nodes.append(Node(new_edge_index, name))
        edge.head_node = new_node_index
        edge.tail = [int(ni) for ni in tail]
        for ni in edge.tail:
            self.nodes[ni].out_edges.append(new_edge_index)
        self.edges.append(edge)
        self._invalidate()

        logger.debug("added node %d = %s", new_node_index,
                     edge.as_string([self.nodes[ni].variable_name for ni in edge.tail]))
        return new_node_index

    def set_value(self, index: int, value: Any) -> None:
        """Replace the value of an input or parameter leaf."""
        edge = self.edges[self._check_index(index)]
        if not isinstance(edge, LeafEdge):
            raise TypeError(f"node {index} is computed by {type(edge).__name__}, not a leaf")
        edge.value = as_matrix(value, edge.dim)
        self._invalidate()

    def parameters(self) -> List[int]:
        """Indices of nodes produced by edges with trainable parameters."""
        return [e.head_node for e in self.edges if e.has_trainable_parameters()]

    def inputs(self) -> List[int]:
        """Indices of zero-argument nodes that are not trainable."""
        return [e.head_node for e in self.edges
                if e.arity == 0 and not e.has_trainable_parameters()]

    # ------------------------------------------------------------------ #
    # computation
    # ------------------------------------------------------------------ #
    def forward(self) -> np.ndarray:
        """
        Evaluate every edge in construction order and return the output value.
        Everything is recomputed on each call.
        """
        if not self.edges:
            raise CallOrderError("forward() on an empty graph")
        self._invalidate()
        for edge in self.edges:
            xs = [self.nodes[ni].value for ni in edge.tail]
            fx = edge.forward(xs)
            if not isinstance(fx, np.ndarray) or fx.ndim != 2:
                raise ShapeError(f"{type(edge).__name__}.forward must return a 2-D ndarray, "
                                 f"got shape {np.shape(fx)}")
            self.nodes[edge.head_node].value = fx
        self._values_fresh = True
        out = self.nodes[-1].value
        logger.debug("forward over %d edges, output shape %s", len(self.edges), out.shape)
        return out

    def backward(self) -> None:
        """
        Accumulate dE/df on every node, where E is the output node.

        Gradients are reset to zero first, so repeated calls give the same
        result. The output is seeded with ones (a 1x1 one for a scalar loss).
        """
        if not self._values_fresh:
            raise CallOrderError("backward() requires forward() on the current graph and values")

        for node in self.nodes:
            node.gradient = np.zeros(node.value.shape)
        out = self.nodes[-1]
        if out.value.shape != (1, 1):
            warnings.warn(
                f"output node has shape {out.value.shape}, not 1x1; "
                f"seeding every element with 1", RuntimeWarning, stacklevel=2)
        out.gradient = np.ones(out.value.shape)

        # Reverse sweep: every consumer of node i has index > i, so node i's
        # gradient is complete when we reach it.
        for i in range(len(self.nodes) - 1, -1, -1):
            node = self.nodes[i]
            edge = self.edges[node.in_edge]
            if edge.arity == 0:
                continue
            xs = [self.nodes[ni].value for ni in edge.tail]
            for pos, ni in enumerate(edge.tail):
                local = edge.backward(xs, node.value, node.gradient, pos)
                if np.shape(local) != xs[pos].shape:
                    raise ShapeError(
                        f"{type(edge).__name__}.backward gave shape {np.shape(local)} "
                        f"for argument {pos} of shape {xs[pos].shape}")
                self.nodes[ni].gradient += local

        self._gradients_fresh = True
        logger.debug("backward over %d nodes", len(self.nodes))

    # ------------------------------------------------------------------ #
    # accessors
    # ------------------------------------------------------------------ #
    def value(self, index: int) -> np.ndarray:
        node = self.nodes[self._check_index(index)]
        if not self._values_fresh:
            raise CallOrderError("values are stale; call forward() first")
        return node.value

    def gradient(self, index: int) -> np.ndarray:
        node = self.nodes[self._check_index(index)]
        if not self._gradients_fresh:
            raise CallOrderError("gradients are stale; call forward() and backward() first")
        return node.gradient

    def _check_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)) \
                or not 0 <= index < len(self.nodes):
            raise GraphIndexError(f"no node {index!r} in a graph of {len(self.nodes)} nodes")
        return int(index)

    def _invalidate(self):
        self._values_fresh = False
        self._gradients_fresh = False
