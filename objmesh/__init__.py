# objmesh/__init__.py
from .mesh import (
    DEFAULT_MAX_FACE_REFS,
    FaceTooLarge, IncompleteStatement, MalformedIndex, MalformedNumber, MeshParseError,
    Mesh, MeshLoader, MeshParser, ParseResult, Vertex, fan_triangulate, parse_obj,
)

__all__ = [
    # Mesh model + parsing
    "Mesh", "Vertex", "MeshParser", "ParseResult", "parse_obj", "fan_triangulate",
    "DEFAULT_MAX_FACE_REFS",
    # File surface
    "MeshLoader",
    # Errors / diagnostics
    "MeshParseError", "MalformedNumber", "MalformedIndex", "IncompleteStatement", "FaceTooLarge",
]
