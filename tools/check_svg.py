#!/usr/bin/env python3
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from svg_check import DEFAULT_CONTRACT, SvgCheckError, build_report, load_contract  # noqa: E402
from svg_check.errors import E1001_CONFIG_ERROR  # noqa: E402

app = typer.Typer(add_completion=False, help="Check a sprite SVG against the style contract.")


@app.command()
def main(
    svg: Path = typer.Option(
        ...,
        "--svg",
        dir_okay=False,
        help="Path to the input svg file.",
    ),
    contract: Path | None = typer.Option(
        None,
        "--contract",
        "-c",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Optional style contract YAML overriding the built-in values.",
    ),
    report: Path | None = typer.Option(
        None,
        "--report",
        "-o",
        dir_okay=False,
        help="Optional path to write the JSON report.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log traversal details."),
) -> None:
    """Validate one SVG and print every issue to stderr."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    style_contract = DEFAULT_CONTRACT
    if contract is not None:
        try:
            style_contract = load_contract(contract)
        except (OSError, ValueError) as exc:
            typer.echo(f"{E1001_CONFIG_ERROR}: failed to load contract: {exc}", err=True)
            raise typer.Exit(code=2)

    try:
        result = build_report(svg, style_contract)
    except SvgCheckError as exc:
        typer.echo(f"{exc.code}: invalid svg file: {exc}", err=True)
        typer.echo(f"hint: {exc.hint}", err=True)
        raise typer.Exit(code=2)

    if report is not None:
        report.write_text(json.dumps(result.to_dict(), indent=2, sort_keys=True))

    for issue in result.errors:
        typer.echo(f"line={issue.line} file={issue.file} message={issue.message}", err=True)
    if result.errors:
        typer.echo(f"{len(result.errors)} issues", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app(prog_name="check_svg")
