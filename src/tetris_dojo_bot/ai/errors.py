from __future__ import annotations


class SolverError(Exception):
    """Base class for decision engine failures."""


class NoLegalMoveError(SolverError):
    """The active piece fits nowhere in the glass."""

    def __init__(self, kind: str, profile: str) -> None:
        super().__init__(f"No legal placement for piece {kind} under profile {profile!r}")
        self.kind = kind
        self.profile = profile


class UnknownProfileError(SolverError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown weight profile: {self.name!r}"


class UnknownFeatureError(SolverError, ValueError):
    """A weight profile names a feature the extractor does not produce."""
