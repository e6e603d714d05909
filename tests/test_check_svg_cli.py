from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
TOOL = ROOT / "tools" / "check_svg.py"

GOOD_SVG = """<svg xmlns="http://www.w3.org/2000/svg" width="70px" height="70px">
  <path d="M 0 0" style="fill:#ffffff;stroke:#000000;stroke-width:0.26458333;stroke-opacity:1;fill-opacity:1" />
</svg>
"""


def _run(*args: str, env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, str(TOOL), *args],
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )


def test_cli_passes_compliant_svg(tmp_path: Path) -> None:
    svg_path = tmp_path / "good.svg"
    svg_path.write_text(GOOD_SVG)
    result = _run("--svg", str(svg_path))
    assert result.returncode == 0, result.stderr
    assert result.stderr == ""


def test_cli_reports_issues_and_writes_report(tmp_path: Path) -> None:
    svg_path = tmp_path / "bad.svg"
    svg_path.write_text(GOOD_SVG.replace("0.26458333", "0.5"))
    report_path = tmp_path / "report.json"
    result = _run("--svg", str(svg_path), "--report", str(report_path))
    assert result.returncode == 1
    lines = result.stderr.strip().splitlines()
    assert lines[0] == (
        f"line=2 file={svg_path} message="
        "<path> stroke-width must be 0.26458333 (got 0.50000000)"
    )
    assert lines[-1] == "1 issues"
    payload = json.loads(report_path.read_text())
    assert payload["status"] == "fail"
    assert payload["errors"][0]["code"] == "E2106_BAD_STROKE_WIDTH"
    assert payload["stats"]["drawables_checked"] == 1


def test_cli_fatal_parse_error(tmp_path: Path) -> None:
    svg_path = tmp_path / "broken.svg"
    svg_path.write_text("<svg><g></svg>")
    result = _run("--svg", str(svg_path))
    assert result.returncode == 2
    assert "E1000_PARSE_ERROR" in result.stderr
    assert "hint: Ensure the SVG is well-formed XML." in result.stderr
    assert "issues" not in result.stderr


def test_cli_runs_with_package_already_importable(tmp_path: Path) -> None:
    svg_path = tmp_path / "bad.svg"
    svg_path.write_text(GOOD_SVG.replace("#000000", "#123456"))
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        item for item in (str(ROOT / "src"), env.get("PYTHONPATH")) if item
    )
    result = _run("--svg", str(svg_path), env=env)
    assert result.returncode == 1, result.stderr
    assert "<path> stroke must be #000000 (got '#123456')" in result.stderr
