"""Error kinds raised while loading, assembling and integrating a circuit."""

from __future__ import annotations


class CircuitError(Exception):
    """Base class for every fatal circuitx error."""


class InvalidNetlist(CircuitError, ValueError):
    """Malformed circuit structure (bad terminals, negative node count, bad file)."""


class UnknownComponentType(CircuitError, ValueError):
    """A component type tag that has no stamping rule."""


class InvalidComponentValue(CircuitError, ValueError):
    """Non-finite or out-of-domain component value (e.g. R <= 0)."""


class IndexConsistencyError(CircuitError):
    """Extra-unknown cursor disagrees with the counted extra unknowns."""


class InvalidSimulationConfig(CircuitError, ValueError):
    """Bad time step, step count, or analysis section."""


class SingularSystem(CircuitError, ArithmeticError):
    """
    The backward Euler iteration matrix could not be solved.

    Attributes:
        trajectory: states computed before the failure, shape (k + 1, n)
        step: index of the step that failed (0 = factorization)
    """

    def __init__(self, message: str, trajectory=None, step: int = 0):
        super().__init__(message)
        self.trajectory = trajectory
        self.step = step
