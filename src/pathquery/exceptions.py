from typing import Optional


class PathQueryError(ValueError):
    """Base exception for all pathquery errors."""


class PathSyntaxError(PathQueryError):
    """Raised when path text cannot be compiled."""

    def __init__(self, message: str, expression: Optional[str] = None, position: Optional[int] = None) -> None:
        self.message = message
        self.expression = expression
        self.position = position
        super().__init__(self._format())

    def _format(self) -> str:
        if self.expression is None:
            return self.message
        if self.position is None:
            return f"{self.message} in {self.expression!r}"
        return f"{self.message} at position {self.position} in {self.expression!r}"


class SelectionError(PathQueryError):
    """Raised when a tabular selection spec is invalid."""
