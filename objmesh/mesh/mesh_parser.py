# objmesh/mesh/mesh_parser.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .errors import (
    FaceTooLarge,
    IncompleteStatement,
    MalformedIndex,
    MalformedNumber,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_FACE_REFS = 30

DEFAULT_POSITION: Tuple[float, float, float] = (0.0, 0.0, 0.0)
DEFAULT_UVW: Tuple[float, float, float] = (1.0, 1.0, 1.0)

# "+12" is accepted, "-1", "1_000", "1.0" are not
_UINT_RE = re.compile(r"\+?[0-9]+")
_UINT_MAX = 2**32 - 1


@dataclass(frozen=True)
class Vertex:
    """Position plus an auxiliary 3-component value (defaults to 1,1,1)."""
    pos: Tuple[float, float, float] = DEFAULT_POSITION
    uvw: Tuple[float, float, float] = DEFAULT_UVW


@dataclass(frozen=True)
class Mesh:
    """
    Flat vertex buffer + flat index buffer.

    Line statements contribute runs of 2 indices and face statements runs of
    3, all in the same `indices` sequence. The consumer decides how to draw a
    given range. Indices are 0-based.
    """
    vertices: Tuple[Vertex, ...] = ()
    indices: Tuple[int, ...] = ()

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def index_count(self) -> int:
        return len(self.indices)

    def positions(self) -> np.ndarray:
        """(N, 3) float32"""
        if not self.vertices:
            return np.zeros((0, 3), dtype=np.float32)
        return np.asarray([v.pos for v in self.vertices], dtype=np.float32)

    def vertex_buffer(self) -> np.ndarray:
        """(N, 6) float32, each row is x, y, z, u, v, w."""
        if not self.vertices:
            return np.zeros((0, 6), dtype=np.float32)
        return np.asarray([v.pos + v.uvw for v in self.vertices], dtype=np.float32)

    def index_buffer(self) -> np.ndarray:
        """(M,) uint32"""
        return np.asarray(self.indices, dtype=np.uint32).reshape(-1)


@dataclass(frozen=True)
class ParseResult:
    mesh: Mesh
    diagnostics: Tuple[FaceTooLarge, ...] = ()


class MeshParser:
    """
    Converts an OBJ-style text document into a Mesh in a single pass.

    Recognized statements:
        v  x y z [u v w]
        l  i1 i2
        f  r1 r2 r3 ...      (r = v | v/vt | v//vn | v/vt/vn)

    Every other statement (vt, vn, g, s, usemtl, comments, ...) is skipped.

    The parser object only holds configuration, so one instance can be shared
    between threads.
    """

    def __init__(self, max_face_refs: int = DEFAULT_MAX_FACE_REFS) -> None:
        if max_face_refs < 3:
            raise ValueError(f"max_face_refs must be >= 3, got {max_face_refs}")
        self.max_face_refs = int(max_face_refs)

    def parse(self, document: str) -> ParseResult:
        vertices: List[Vertex] = []
        indices: List[int] = []
        diagnostics: List[FaceTooLarge] = []

        for line_number, raw in enumerate(document.split("\n"), start=1):
            # str.split() also drops a trailing "\r"
            tokens = raw.split()
            if not tokens:
                continue

            keyword, args = tokens[0], tokens[1:]
            statement = raw.strip()

            if keyword == "v":
                vertices.append(self._parse_vertex(args, line_number, statement))
            elif keyword == "l":
                indices.extend(self._parse_line(args, len(vertices), line_number, statement))
            elif keyword == "f":
                refs = self._parse_face(args, len(vertices), line_number, statement)
                if len(args) > self.max_face_refs:
                    diag = FaceTooLarge(line_number=line_number, reference_count=len(args), cap=self.max_face_refs)
                    logger.warning("%s", diag)
                    diagnostics.append(diag)
                indices.extend(fan_triangulate(refs))
            # anything else is ignored

        mesh = Mesh(vertices=tuple(vertices), indices=tuple(indices))
        logger.debug(
            "Parsed mesh: %d vertices, %d indices, %d diagnostics",
            mesh.vertex_count, mesh.index_count, len(diagnostics),
        )
        return ParseResult(mesh=mesh, diagnostics=tuple(diagnostics))

    # ---------------------------
    # Statements
    # ---------------------------
    @staticmethod
    def _parse_vertex(args: Sequence[str], line_number: int, statement: str) -> Vertex:
        values = [_parse_float(tok, line_number, statement) for tok in args[:6]]
        pos = tuple(values[0:3]) + DEFAULT_POSITION[len(values[0:3]):]
        uvw = tuple(values[3:6]) + DEFAULT_UVW[len(values[3:6]):]
        return Vertex(pos=pos, uvw=uvw)

    @staticmethod
    def _parse_line(args: Sequence[str], n_verts: int, line_number: int, statement: str) -> List[int]:
        if len(args) < 2:
            raise IncompleteStatement(
                f"line statement needs 2 vertex indices, got {len(args)}",
                line_number=line_number,
                statement=statement,
            )
        return [_parse_vertex_index(tok, n_verts, line_number, statement) for tok in args[:2]]

    def _parse_face(self, args: Sequence[str], n_verts: int, line_number: int, statement: str) -> List[int]:
        if len(args) < 3:
            raise IncompleteStatement(
                f"face statement needs at least 3 references, got {len(args)}",
                line_number=line_number,
                statement=statement,
            )
        return [
            _parse_face_reference(tok, n_verts, line_number, statement)
            for tok in args[: self.max_face_refs]
        ]


def fan_triangulate(refs: Sequence[int]) -> List[int]:
    """
    Triangle fan anchored at refs[0]:
        [a, b, c, d] -> [a, b, c,  a, c, d]
    Fewer than 3 references yields nothing.
    """
    out: List[int] = []
    if len(refs) < 3:
        return out
    v0 = refs[0]
    for i in range(1, len(refs) - 1):
        out.extend((v0, refs[i], refs[i + 1]))
    return out


def parse_obj(document: str, max_face_refs: int = DEFAULT_MAX_FACE_REFS) -> Mesh:
    """Shortcut when the truncation diagnostics are not needed."""
    return MeshParser(max_face_refs=max_face_refs).parse(document).mesh


# ---------------------------
# Token helpers
# ---------------------------
def _parse_float(token: str, line_number: int, statement: str) -> float:
    try:
        if "_" in token:
            raise ValueError(f"digit separators are not allowed: {token!r}")
        return float(token)
    except ValueError as e:
        raise MalformedNumber(
            "expected a floating point coordinate",
            line_number=line_number,
            token=token,
            statement=statement,
        ) from e


def _parse_uint(token: str, line_number: int, statement: str) -> int:
    if not _UINT_RE.fullmatch(token):
        raise MalformedIndex(
            "expected a non-negative integer",
            line_number=line_number,
            token=token,
            statement=statement,
        )
    try:
        value = int(token)
    except ValueError as e:
        # past the interpreter's integer digit limit
        raise MalformedIndex(
            "integer is out of range",
            line_number=line_number,
            token=token,
            statement=statement,
        ) from e
    if value > _UINT_MAX:
        raise MalformedIndex(
            "integer is out of range",
            line_number=line_number,
            token=token,
            statement=statement,
        )
    return value


def _parse_vertex_index(token: str, n_verts: int, line_number: int, statement: str) -> int:
    """1-based source index -> validated 0-based index."""
    vi = _parse_uint(token, line_number, statement)
    if vi == 0:
        raise MalformedIndex(
            "vertex indices are 1-based, 0 is invalid",
            line_number=line_number,
            token=token,
            statement=statement,
        )
    if vi > n_verts:
        raise MalformedIndex(
            f"vertex {vi} referenced but only {n_verts} declared so far",
            line_number=line_number,
            token=token,
            statement=statement,
        )
    return vi - 1


def _parse_face_reference(token: str, n_verts: int, line_number: int, statement: str) -> int:
    """
    Face token -> 0-based vertex index.
    - "3", "3/2", "3//7", "3/2/7"
    Texture / normal subfields are checked but not kept.
    """
    parts = token.split("/")
    if len(parts) > 3:
        raise MalformedIndex(
            "face reference has more than 3 subfields",
            line_number=line_number,
            token=token,
            statement=statement,
        )

    idx = _parse_vertex_index(parts[0], n_verts, line_number, statement)

    if len(parts) >= 2:
        vt, vn = parts[1], (parts[2] if len(parts) == 3 else None)
        # "v//vn" is legal, "v/" and "v/vt/" are not
        if vt or vn is None:
            _check_attribute_index(vt, token, line_number, statement)
        if vn is not None:
            _check_attribute_index(vn, token, line_number, statement)

    return idx


def _check_attribute_index(sub: str, token: str, line_number: int, statement: str) -> None:
    if _parse_uint(sub, line_number, statement) == 0:
        raise MalformedIndex(
            "texture/normal index must be a positive integer",
            line_number=line_number,
            token=token,
            statement=statement,
        )
