"""Error types raised by the sorting engine."""

import traceback

from .settings import USER_CODE_FILENAME


class SortError(Exception):
    """Base class for failures reported through a run's terminal callback."""


class CompilationError(SortError):
    PREFIX = "Compilation Error"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "CompilationError":
        detail = str(exc) or type(exc).__name__
        if isinstance(exc, SyntaxError):
            detail = exc.msg or detail
            if exc.lineno is not None:
                detail += _location(exc.lineno, exc.offset)
        return cls(f"{cls.PREFIX}: {detail}")


class SortRuntimeError(SortError):
    PREFIX = "Runtime Error"

    @classmethod
    def from_exception(cls, exc: BaseException,
                       filename: str = USER_CODE_FILENAME) -> "SortRuntimeError":
        """
        Wrap an exception thrown while sorting.
        If the traceback passes through user source, the innermost such frame
        is appended as "(at line L, column C)".
        """
        detail = str(exc) or type(exc).__name__
        frames = [f for f in traceback.extract_tb(exc.__traceback__)
                  if f.filename == filename]
        if frames:
            last = frames[-1]
            col  = getattr(last, "colno", None)
            detail += _location(last.lineno, None if col is None else col + 1)
        err = cls(f"{cls.PREFIX}: {detail}")
        err.__cause__ = exc
        return err


class SortCancelled(BaseException):
    """
    Raised out of emit() once the run's cancel flag is seen.

    Derives from BaseException, like GeneratorExit, so that an
    ``except Exception`` inside user code cannot swallow it.
    """


class ConfigError(ValueError):
    pass


def _location(line, column) -> str:
    if column is None:
        return f" (at line {line})"
    return f" (at line {line}, column {column})"
