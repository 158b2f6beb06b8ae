class UnrecognizedBackendValue(ValueError):
    """Raised when a backend enumerator has no counterpart on the workbench side."""


class OptionError(ValueError):
    """Base class of the errors raised while parsing option flags."""


class UnknownOptionError(OptionError):
    """A flag that no option of the target class declares."""


class MalformedOptionError(OptionError):
    """A flag without a value, or with a value its parser rejects."""
