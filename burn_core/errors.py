"""Exception types raised by curve and configuration builders."""


class InvalidInputError(ValueError):
    """Raised when a construction precondition is violated."""


class InvalidCurveError(InvalidInputError):
    """Raised when spline keys are too few or not strictly increasing in time."""
