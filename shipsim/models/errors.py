"""Domain errors raised by simulation operations."""


class DomainError(ValueError):
    """Raised when an operation violates a rule of the simulated world.

    Operations check every precondition before mutating anything, so a
    DomainError always leaves the world unchanged. The controller reports
    the message to the operator and carries on.
    """
