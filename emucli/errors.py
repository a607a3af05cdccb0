from pathlib import Path
from typing import Optional, Union


class EmuCliError(Exception):
    """Base for every failure that ends the current invocation."""
    exit_code = 1


class UsageError(EmuCliError):
    def __init__(self, message: str, flag: Optional[str] = None):
        super().__init__(message)
        self.flag = flag


class NoArgumentsError(UsageError):
    def __init__(self):
        super().__init__("No arguments given.")


class PathValidationError(EmuCliError):
    def __init__(self, message: str, path: Union[str, Path]):
        super().__init__(message)
        self.path = path


class GameNotFoundError(EmuCliError):
    def __init__(self, raw: str):
        super().__init__(f"Game ID or file path not found: {raw}")
        self.raw = raw


class EarlyExit(Exception):
    """A command finished its work during parsing (help, saved settings)."""

    def __init__(self, message: str = "", exit_code: int = 0):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class ArgumentWarning(UserWarning):
    """Something on the command line was ignored; parsing went on."""


class UnknownFlagWarning(ArgumentWarning):
    pass
