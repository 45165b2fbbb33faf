"""
Hypergraph Configuration

Engine-wide settings shared by graph construction and gradient checking.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from .dim import DEFAULT_INIT_SCALE


@dataclass
class HypergraphConfig:
    """
    Shared configuration for a Hypergraph.

    Attributes:
        init_scale: Magnitude of the uniform random parameter initialisation
        seed: Seed for the graph's random generator (None = nondeterministic)
        gradcheck_eps: Step used by central-difference gradient checks
        gradcheck_tol: Tolerance used by central-difference gradient checks
    """
    init_scale: float = DEFAULT_INIT_SCALE
    seed: Optional[int] = None
    gradcheck_eps: float = 1e-6
    gradcheck_tol: float = 1e-4

    def __post_init__(self):
        if self.init_scale < 0:
            raise ValueError(f"init_scale must be non-negative, got {self.init_scale}")
        if self.gradcheck_eps <= 0:
            raise ValueError(f"gradcheck_eps must be positive, got {self.gradcheck_eps}")
        if self.gradcheck_tol <= 0:
            raise ValueError(f"gradcheck_tol must be positive, got {self.gradcheck_tol}")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "HypergraphConfig":
        """
        Build a config from a plain dict, e.g. one loaded from a settings file.

        Unknown keys are ignored so that a larger settings file can be passed as is.

        Example:
            HypergraphConfig.from_mapping({"seed": 7, "init_scale": 0.01})
        """
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})
