"""Exception hierarchy for the box packing core."""


class PackingError(Exception):
    """Base class for all errors raised by boxpacker."""


class ConfigurationError(PackingError):
    """Dimension bounds used before initialization or initialized twice."""


class ValidationError(PackingError, ValueError):
    """A rectangle, box or bounds value is outside its allowed range."""


class LogicViolation(PackingError, AssertionError):
    """A caller broke a precondition, e.g. adding a rectangle that does not fit."""
