"""Exception types raised by the geometry decoder, the generators and the PDF writer."""
from __future__ import annotations

from typing import Sequence


class LinedPaperError(Exception):
    pass


class GeometryDefError(LinedPaperError, ValueError):
    """The geometry definition document does not have the expected shape."""

    def __init__(self, path: Sequence[str], message: str) -> None:
        self.path = tuple(path)
        location = ".".join(self.path) if self.path else "<root>"
        super().__init__(f"{location}: {message}")


class LineSetParameterError(LinedPaperError, ValueError):
    """A line set parameter violates a generator precondition."""

    def __init__(self, parameter: str, value: float, constraint: str) -> None:
        self.parameter = parameter
        self.value = value
        self.constraint = constraint
        super().__init__(f"{parameter} of {value} is invalid: {constraint}")


class NotPositiveError(LineSetParameterError):
    def __init__(self, parameter: str, value: float) -> None:
        super().__init__(parameter, value, "must be a positive number")


class NotFiniteError(LineSetParameterError):
    def __init__(self, parameter: str, value: float) -> None:
        super().__init__(parameter, value, "must be a finite number")


class SlantAngleOutOfRangeError(LineSetParameterError):
    def __init__(self, value: float, minimum: float, maximum: float) -> None:
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            "slant angle", value, f"must be between {minimum} and {maximum} degrees"
        )


class PageCountError(LinedPaperError, ValueError):
    def __init__(self, value: int, minimum: int, maximum: int) -> None:
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"page count {value} is out of range, it must be between {minimum} and {maximum}"
        )


class RenderError(LinedPaperError, RuntimeError):
    pass


__all__ = [
    "GeometryDefError",
    "LineSetParameterError",
    "LinedPaperError",
    "NotFiniteError",
    "NotPositiveError",
    "PageCountError",
    "RenderError",
    "SlantAngleOutOfRangeError",
]
