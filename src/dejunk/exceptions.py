"""Exceptions raised by dejunk."""


class DejunkError(Exception):
    """Base class for dejunk errors."""


class TargetPathError(DejunkError):
    """The target root does not exist or is not a directory."""

    def __init__(self, path: str, reason: str = "does not exist") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Directory '{path}' {reason}")


class LogFileError(DejunkError):
    """The log file cannot be created or opened for writing."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write log file '{path}': {reason}")
