# objmesh/mesh/__init__.py
from .errors import (
    FaceTooLarge, IncompleteStatement, MalformedIndex, MalformedNumber, MeshParseError
)
from .mesh_loader import MeshLoader
from .mesh_parser import (
    DEFAULT_MAX_FACE_REFS, Mesh, MeshParser, ParseResult, Vertex, fan_triangulate, parse_obj
)

__all__ = [
    "Mesh", "Vertex", "MeshParser", "ParseResult", "parse_obj", "fan_triangulate",
    "DEFAULT_MAX_FACE_REFS",
    "MeshLoader",
    "MeshParseError", "MalformedNumber", "MalformedIndex", "IncompleteStatement", "FaceTooLarge",
]
