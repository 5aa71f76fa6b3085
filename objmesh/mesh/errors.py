# objmesh/mesh/errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class MeshParseError(ValueError):
    """
    Base class for every fatal OBJ parse failure.

    The whole document is rejected when one of these is raised; callers never
    receive a partially built mesh.
    """

    kind = "parse error"

    def __init__(
        self,
        message: str,
        *,
        line_number: int,
        token: Optional[str] = None,
        statement: Optional[str] = None,
    ) -> None:
        self.message = message
        self.line_number = line_number
        self.token = token
        self.statement = statement
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f"line {self.line_number}"
        if self.token is not None:
            return f"{where}: {self.kind}: {self.message} (token={self.token!r})"
        return f"{where}: {self.kind}: {self.message}"


class MalformedNumber(MeshParseError):
    """A coordinate token is not a valid float."""

    kind = "malformed number"


class MalformedIndex(MeshParseError):
    """An index token is not a positive integer, or points past the vertices declared so far."""

    kind = "malformed index"


class IncompleteStatement(MeshParseError):
    """A v/l/f statement has fewer tokens than it needs."""

    kind = "incomplete statement"


@dataclass(frozen=True)
class FaceTooLarge:
    """
    Non-fatal diagnostic: a face statement listed more references than the
    parser cap, and only the first `cap` were triangulated.
    """
    line_number: int
    reference_count: int
    cap: int

    def __str__(self) -> str:
        return (
            f"line {self.line_number}: face has {self.reference_count} references, "
            f"truncated to {self.cap}"
        )
