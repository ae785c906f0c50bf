"""
Exceptions raised by the setup package.
"""


class SetupError(Exception):
    """Base class for setup errors."""


class InputCancelled(SetupError):
    """The operator closed the input stream while being prompted."""


class EntropySourceUnavailable(SetupError):
    """The operating system could not supply secure random bytes."""


class EnvWriteError(SetupError):
    """Writing the environment file failed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write {path}: {reason}")


class ConfigFileError(SetupError):
    """An answers file could not be read or does not match the schema."""
