from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .mesh_parser import DEFAULT_MAX_FACE_REFS, MeshParser, ParseResult

logger = logging.getLogger(__name__)


class MeshLoader:
    """
    Reads an OBJ file from disk and hands the whole text to MeshParser.

    Notes:
    - The file is read fully up front; parsing is not incremental.
    - Bytes that are not valid UTF-8 are replaced, so only the statements
      that actually contain them can fail.
    """

    @staticmethod
    def load(obj_path: Union[str, Path], max_face_refs: int = DEFAULT_MAX_FACE_REFS) -> ParseResult:
        obj_path = Path(obj_path)
        if not obj_path.exists():
            raise FileNotFoundError(f"OBJ file not found: {obj_path}")

        text = obj_path.read_text(encoding="utf-8", errors="replace")
        logger.debug("Loaded %s (%d chars)", obj_path, len(text))
        return MeshParser(max_face_refs=max_face_refs).parse(text)
