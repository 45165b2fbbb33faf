# hypergrad/ops/transcendental.py
import numpy as np
from scipy.special import expit
from ..core.edge import Edge


class Exp(Edge):
    ARITY = 1

    def as_string(self, var_names):
        return f"exp({var_names[0]})"

    def forward(self, xs):
        return np.exp(xs[0])

    def backward(self, xs, fx, dEdf, i):
        return dEdf * fx


class Log(Edge):
    ARITY = 1

    def as_string(self, var_names):
        return f"log({var_names[0]})"

    def forward(self, xs):
        return np.log(xs[0])

    def backward(self, xs, fx, dEdf, i):
        return dEdf / xs[0]


class Tanh(Edge):
    ARITY = 1

    def as_string(self, var_names):
        return f"tanh({var_names[0]})"

    def forward(self, xs):
        return np.tanh(xs[0])

    def backward(self, xs, fx, dEdf, i):
        # d tanh(x)/dx = 1 - tanh(x)^2
        return dEdf * (1.0 - fx * fx)


class LogisticSigmoid(Edge):
    """
    sigma(x) = 1 / (1 + e^-x)

    Derivative: sigma(x) * (1 - sigma(x)), computed from the cached output.
    """
    ARITY = 1

    def as_string(self, var_names):
        return f"σ({var_names[0]})"

    def forward(self, xs):
        return expit(xs[0])

    def backward(self, xs, fx, dEdf, i):
        return dEdf * fx * (1.0 - fx)


class Rectify(Edge):
    """ReLU: max(0, x). The subgradient at 0 is taken to be 0."""
    ARITY = 1

    def as_string(self, var_names):
        return f"ReLU({var_names[0]})"

    def forward(self, xs):
        return np.maximum(xs[0], 0.0)

    def backward(self, xs, fx, dEdf, i):
        return dEdf * (xs[0] > 0)
