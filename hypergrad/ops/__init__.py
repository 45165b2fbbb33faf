# hypergrad/ops/__init__.py

# Convenience re-exports so users can do: from hypergrad.ops import Sum, Tanh, ...
from .arithmetic import Sum, Difference, Negate, CwiseMultiply, MatrixMultiply, Transpose
from .transcendental import Exp, Log, Tanh, LogisticSigmoid, Rectify
from .loss import SumElements, SquaredEuclideanDistance

__all__ = [
    "Sum", "Difference", "Negate", "CwiseMultiply", "MatrixMultiply", "Transpose",
    "Exp", "Log", "Tanh", "LogisticSigmoid", "Rectify",
    "SumElements", "SquaredEuclideanDistance",
]
