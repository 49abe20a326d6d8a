"""
Exception hierarchy.

Routine invalid moves (not enough buttons, blocked cells, empty market slot)
are reported through result flags and never raise. These exceptions are for
broken invariants and corrupt input.
"""


class PatchworkError(Exception):
    """Base class for all engine errors."""


class CatalogError(PatchworkError):
    """Patch catalog definitions are inconsistent (duplicate shape or variant)."""


class TurnOrderError(PatchworkError):
    """An action was requested in a phase that does not allow it."""


class HistoryError(PatchworkError):
    """A history log is malformed or was finalized twice."""


class ReplayError(PatchworkError):
    """Replaying a history did not reproduce a consistent game."""
