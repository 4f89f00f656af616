"""Exceptions raised by the combat simulator."""
from __future__ import annotations


class BanditsError(Exception):
    """Base class for simulator errors."""


class MapParseError(BanditsError, ValueError):
    """Raised when a map cannot be turned into a grid."""

    def __init__(self, message: str, row: int | None = None, column: int | None = None) -> None:
        if row is not None:
            where = f"line {row + 1}" if column is None else f"line {row + 1}, column {column + 1}"
            message = f"{where}: {message}"
        super().__init__(message)
        self.row = row
        self.column = column


class GridError(BanditsError):
    """Raised when the grid is asked to do something impossible."""


class OutOfBoundsError(GridError, IndexError):
    """Raised on access outside the grid."""


class OccupiedCellError(GridError):
    """Raised when a unit would be placed on top of another."""


class InvalidMoveError(GridError):
    """Raised when a unit is moved to a cell that is not an adjacent open cell."""


class SearchExhaustedError(BanditsError):
    """Raised when no attack power within the search limit wins flawlessly."""


class PathingError(GridError):
    """Raised when a planned move has no first step towards its destination."""


class ConfigError(BanditsError, ValueError):
    """Raised for combat settings no battle can be fought with."""
