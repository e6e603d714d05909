from __future__ import annotations

from pathlib import Path

import pytest

from svg_check import ElementClose, ElementOpen, SvgCheckError, iter_tokens, validate_svg
from svg_check.errors import E1000_PARSE_ERROR, E1003_IO_ERROR


def _write_svg(tmp_path: Path, svg_text: str) -> Path:
    svg_path = tmp_path / "input.svg"
    svg_path.write_text(svg_text)
    return svg_path


def test_tokens_follow_document_order(tmp_path: Path) -> None:
    svg_text = (
        '<svg xmlns="http://www.w3.org/2000/svg"\n'
        '     xmlns:inkscape="http://www.inkscape.org/namespaces/inkscape"\n'
        '     width="70" height="70">\n'
        '  <g inkscape:label="Layer 1">\n'
        "    <path d=\"M 0 0\" />\n"
        "  </g>\n"
        "</svg>\n"
    )
    tokens = list(iter_tokens(_write_svg(tmp_path, svg_text)))
    assert [type(token) for token in tokens] == [
        ElementOpen,
        ElementOpen,
        ElementOpen,
        ElementClose,
        ElementClose,
        ElementClose,
    ]
    svg, group, path = (token for token in tokens if isinstance(token, ElementOpen))
    assert svg.tag == "svg"
    assert svg.attributes == {"width": "70", "height": "70"}
    assert group.attributes == {"label": "Layer 1"}
    assert (group.line, path.line) == (4, 5)
    assert [token.tag for token in tokens if isinstance(token, ElementClose)] == [
        "path",
        "g",
        "svg",
    ]


def test_malformed_markup_is_fatal(tmp_path: Path) -> None:
    svg_path = _write_svg(
        tmp_path,
        '<svg xmlns="http://www.w3.org/2000/svg" width="70" height="70"><g></svg>',
    )
    with pytest.raises(SvgCheckError) as excinfo:
        validate_svg(svg_path)
    assert excinfo.value.code == E1000_PARSE_ERROR


def test_truncated_document_is_fatal(tmp_path: Path) -> None:
    svg_path = _write_svg(tmp_path, '<svg xmlns="http://www.w3.org/2000/svg"><image href="x.png"/>')
    with pytest.raises(SvgCheckError) as excinfo:
        validate_svg(svg_path)
    assert excinfo.value.code == E1000_PARSE_ERROR


def test_missing_file_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(SvgCheckError) as excinfo:
        validate_svg(tmp_path / "missing.svg")
    assert excinfo.value.code == E1003_IO_ERROR
    assert "missing.svg" in str(excinfo.value)


def test_multiline_start_tag_reports_closing_line(tmp_path: Path) -> None:
    svg_text = (
        '<svg xmlns="http://www.w3.org/2000/svg" width="70" height="70">\n'
        "  <path\n"
        '     d="M 0 0"\n'
        '     style="fill:red" />\n'
        "</svg>\n"
    )
    issues = validate_svg(_write_svg(tmp_path, svg_text))
    assert issues
    assert {issue.line for issue in issues} == {4}
