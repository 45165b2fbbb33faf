# hypergrad/core/__init__.py

"""
Core public API for the hypergraph engine.

Exports:
    Dim              : 2-D shape with checked multiplication.
    Edge             : Abstract function of zero or more argument nodes.
    Node             : SSA variable holding a cached value and gradient.
    Hypergraph       : Owns nodes/edges; construction, forward() and backward().
    HypergraphConfig : Engine-wide settings.
    check_gradients  : Compare backward() with central differences.
"""

from .dim import Dim, multiply, zero, random, as_matrix
from .errors import (
    HypergraphError, ShapeError, GraphIndexError, ArityError,
    CallOrderError, GradientCheckError,
)
from .config import HypergraphConfig
from .edge import Edge, LeafEdge, InputEdge, ParameterEdge
from .node import Node
from .graph import Hypergraph
from .gradcheck import numeric_gradient, check_gradients

__all__ = [
    "Dim", "multiply", "zero", "random", "as_matrix",
    "HypergraphError", "ShapeError", "GraphIndexError", "ArityError",
    "CallOrderError", "GradientCheckError",
    "HypergraphConfig",
    "Edge", "LeafEdge", "InputEdge", "ParameterEdge",
    "Node",
    "Hypergraph",
    "numeric_gradient", "check_gradients",
]
