# hypergrad/__init__.py
# Reverse-mode automatic differentiation over an explicit computation hypergraph

from .core.dim import Dim
from .core.config import HypergraphConfig
from .core.edge import Edge
from .core.node import Node
from .core.graph import Hypergraph
from .core.errors import (
    HypergraphError,
    ShapeError,
    GraphIndexError,
    ArityError,
    CallOrderError,
    GradientCheckError,
)
from .core.gradcheck import numeric_gradient, check_gradients
from .core.graph_utils import get_graph_stats, print_graph_summary, to_graphviz

# Concrete functions
from . import ops

__all__ = [
    # Core
    'Dim',
    'HypergraphConfig',
    'Edge',
    'Node',
    'Hypergraph',
    # Errors
    'HypergraphError',
    'ShapeError',
    'GraphIndexError',
    'ArityError',
    'CallOrderError',
    'GradientCheckError',
    # Gradient checks
    'numeric_gradient',
    'check_gradients',
    # Graph utilities
    'get_graph_stats',
    'print_graph_summary',
    'to_graphviz',
    # Functions
    'ops',
]
