# hypergrad/core/node.py
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np


@dataclass
class Node:
    """
    One SSA variable of the hypergraph, written once by the edge that computes it.

    Attributes
    ----------
    in_edge   : int
        Index of the edge computing this variable (always equal to the node's own index).
    var_name  : str
        Debug name; has no effect on computation.
    out_edges : List[int]
        Indices of the edges that take this variable as an argument, in the
        order they were added.
    value     : Optional[np.ndarray]
        f(x_1, ..., x_n), cached by the last forward pass.
    gradient  : Optional[np.ndarray]
        dE/df, accumulated by the last backward pass; same shape as value.
    """
    in_edge: int
    var_name: str = ""
    out_edges: List[int] = field(default_factory=list)
    value: Optional[np.ndarray] = None
    gradient: Optional[np.ndarray] = None

    @property
    def variable_name(self) -> str:
        return self.var_name or f"v{self.in_edge}"

    @property
    def label(self) -> str:
        return self.var_name
