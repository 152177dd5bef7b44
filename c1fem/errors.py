"""c1fem.errors"""


class C1FemError(Exception):
    """Base class for errors raised by c1fem."""


class ConfigurationError(C1FemError, ValueError):
    """Invalid grid extents, precision selection or other caller settings."""


class PreconditionError(C1FemError, ValueError):
    """Input of the wrong shape or length handed to a routine."""
