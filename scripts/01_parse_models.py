#!/usr/bin/env python3
"""
01_parse_models.py

Parse a batch of OBJ files into render-ready meshes and report what happened.

Behavior:
- Each file is parsed independently (all-or-nothing per file).
- A file that fails to parse is reported as FAIL with the offending line and
  the batch continues.
- Faces longer than --max-face-refs are truncated and reported as WARN.
- Optional JSON summary with per-file counts, diagnostics and failures.

Run:
    python scripts/01_parse_models.py models/cube.obj models/teapot.obj
    python scripts/01_parse_models.py --obj-root data/raw --workers 4 --out out/parse_summary.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional, Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from objmesh import DEFAULT_MAX_FACE_REFS, MeshLoader, MeshParseError


# -------------------------
# Helpers
# -------------------------
def collect_paths(paths: Sequence[str], obj_root: Optional[str], limit: Optional[int]) -> List[Path]:
    out = [Path(p) for p in paths]
    if obj_root:
        root = Path(obj_root)
        if not root.is_dir():
            raise FileNotFoundError(f"OBJ root not found: {root}")
        out.extend(sorted(root.rglob("*.obj")))
    if limit is not None:
        out = out[: max(0, limit)]
    return out


def parse_one(path: Path, max_face_refs: int) -> Dict:
    """
    Parse a single file and return a JSON-friendly record.
    Never raises for parse/IO problems; those become status=FAIL.
    """
    t0 = time.time()
    rec: Dict = {"path": str(path)}
    try:
        result = MeshLoader.load(path, max_face_refs=max_face_refs)
    except MeshParseError as e:
        rec.update(status="FAIL", error=str(e), line=e.line_number)
    except (FileNotFoundError, OSError) as e:
        rec.update(status="FAIL", error=str(e), line=None)
    else:
        mesh = result.mesh
        rec.update(
            status="WARN" if result.diagnostics else "OK",
            vertices=mesh.vertex_count,
            indices=mesh.index_count,
            diagnostics=[str(d) for d in result.diagnostics],
        )
    rec["time_sec"] = round(time.time() - t0, 4)
    return rec


def write_summary(path: Path, records: List[Dict], max_face_refs: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "settings": {"max_face_refs": max_face_refs},
        "summary": {
            "total": len(records),
            "ok": sum(r["status"] == "OK" for r in records),
            "warn": sum(r["status"] == "WARN" for r in records),
            "failed": sum(r["status"] == "FAIL" for r in records),
        },
        "files": records,
    }
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


# -------------------------
# Main
# -------------------------
def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Parse OBJ files into vertex/index buffers.")
    ap.add_argument("paths", nargs="*", help="OBJ files to parse.")
    ap.add_argument("--obj-root", default=None, help="Also parse every *.obj under this directory.")
    ap.add_argument("--max-face-refs", type=int, default=DEFAULT_MAX_FACE_REFS)
    ap.add_argument("--workers", type=int, default=1, help="Parse files in parallel (one file per worker).")
    ap.add_argument("--limit", type=int, default=None, help="Debug: parse only first N files.")
    ap.add_argument("--out", default=None, help="Write a JSON summary here.")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.max_face_refs < 3:
        raise SystemExit("--max-face-refs must be >= 3")

    files = collect_paths(args.paths, args.obj_root, args.limit)
    if not files:
        raise SystemExit("No OBJ files given (pass paths or --obj-root).")

    print("[INFO] Files        :", len(files))
    print("[INFO] max_face_refs:", args.max_face_refs)
    print("[INFO] workers      :", args.workers)

    start_all = time.time()
    workers = max(1, args.workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        records = list(pool.map(lambda p: parse_one(p, args.max_face_refs), files))

    total = len(records)
    for i, rec in enumerate(records, start=1):
        if rec["status"] == "FAIL":
            print(f"[{i:>4}/{total}] FAIL  {rec['path']}  err={rec['error']}")
        else:
            print(
                f"[{i:>4}/{total}] {rec['status']:<5} {rec['path']}  "
                f"v={rec['vertices']} i={rec['indices']}  {rec['time_sec']:.3f}s"
            )
            for d in rec["diagnostics"]:
                print(f"             {d}")

    if args.out:
        write_summary(Path(args.out), records, args.max_face_refs)
        print("[INFO] Summary      :", args.out)

    failed = sum(r["status"] == "FAIL" for r in records)
    total_time = time.time() - start_all
    print("\n[FINISHED]")
    print(f"  OK     : {total - failed}")
    print(f"  FAIL   : {failed}")
    print(f"  TIME   : {total_time:.2f}s")
    return 1 if failed else 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        print(f"\n[ERROR] {e}", file=sys.stderr)
        sys.exit(1)
