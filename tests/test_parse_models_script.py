from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "01_parse_models.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("parse_models", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_batch_reports_ok_and_fail(script, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    root = tmp_path / "models"
    _write(root / "a" / "square.obj", "v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nf 1 2 3 4\n")
    _write(root / "b" / "broken.obj", "v 0 0 0\nl 1\n")
    out = tmp_path / "out" / "summary.json"

    code = script.main(["--obj-root", str(root), "--workers", "2", "--out", str(out)])

    assert code == 1
    printed = capsys.readouterr().out
    assert "OK" in printed and "FAIL" in printed

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["summary"] == {"total": 2, "ok": 1, "warn": 0, "failed": 1}
    by_name = {Path(r["path"]).name: r for r in payload["files"]}
    assert by_name["square.obj"]["indices"] == 6
    assert by_name["broken.obj"]["line"] == 2


def test_truncated_face_is_a_warning(script, tmp_path: Path) -> None:
    obj = _write(tmp_path / "poly.obj", "\n".join(f"v {i} 0 0" for i in range(5)) + "\nf 1 2 3 4 5\n")
    rec = script.parse_one(obj, max_face_refs=3)
    assert rec["status"] == "WARN"
    assert rec["indices"] == 3
    assert len(rec["diagnostics"]) == 1


def test_missing_file_is_reported_not_raised(script, tmp_path: Path) -> None:
    rec = script.parse_one(tmp_path / "missing.obj", max_face_refs=30)
    assert rec["status"] == "FAIL"


def test_no_inputs_exits(script) -> None:
    with pytest.raises(SystemExit):
        script.main([])


def test_oversized_index_fails_only_its_file(script, tmp_path: Path) -> None:
    bad = _write(tmp_path / "huge.obj", "v 0 0 0\nv 1 0 0\nv 1 1 0\nf 1 2 " + "9" * 5000 + "\n")
    good = _write(tmp_path / "tri.obj", "v 0 0 0\nv 1 0 0\nv 1 1 0\nf 1 2 3\n")
    out = tmp_path / "summary.json"

    assert script.main([str(bad), str(good), "--out", str(out)]) == 1

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["summary"]["failed"] == 1
    assert payload["summary"]["ok"] == 1
    assert payload["files"][0]["line"] == 4
