# hypergrad/core/errors.py
"""
Exceptions raised by the hypergraph engine.

Every error derives from `HypergraphError` and from the builtin that best
describes it, so callers may catch either `ShapeError` or `ValueError`.
None of these are meant to be retried: the computation is deterministic, so
the same graph will fail the same way until the caller fixes it.
"""


class HypergraphError(Exception):
    """Base class for all engine errors."""


class ShapeError(HypergraphError, ValueError):
    """Incompatible or malformed matrix dimensions."""


class GraphIndexError(HypergraphError, IndexError):
    """A node index that does not exist, or would break topological order."""


class ArityError(HypergraphError, ValueError):
    """A function was given the wrong number of arguments."""


class CallOrderError(HypergraphError, RuntimeError):
    """forward()/backward() called in an order that would give stale results."""


class GradientCheckError(HypergraphError, AssertionError):
    """Analytic and numeric gradients disagree beyond tolerance."""
