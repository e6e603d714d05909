from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping

from .contract import DEFAULT_CONTRACT, StyleContract
from .report import ValidationIssue, ValidationReport
from .svg_checks import (
    close_enough,
    element_hidden,
    merge_styles,
    own_style,
    parse_number,
    parse_px_length,
)
from .tokens import ElementClose, ElementOpen, Token, iter_tokens

logger = logging.getLogger(__name__)

E2101_ROOT_MISSING = "E2101_ROOT_MISSING"
E2102_ROOT_SIZE_MISSING = "E2102_ROOT_SIZE_MISSING"
E2103_ROOT_SIZE_INVALID = "E2103_ROOT_SIZE_INVALID"
E2104_BAD_FILL = "E2104_BAD_FILL"
E2105_BAD_STROKE = "E2105_BAD_STROKE"
E2106_BAD_STROKE_WIDTH = "E2106_BAD_STROKE_WIDTH"
E2107_BAD_STROKE_OPACITY = "E2107_BAD_STROKE_OPACITY"
E2108_BAD_FILL_OPACITY = "E2108_BAD_FILL_OPACITY"
E2109_VISIBLE_IMAGE = "E2109_VISIBLE_IMAGE"

ROOT_TAG = "svg"
DEFS_TAG = "defs"
IMAGE_TAG = "image"


def _format_px(value: float) -> str:
    return f"{value:.6g}"


def _check_root_canvas(
    file: str, line: int, attributes: Mapping[str, str], contract: StyleContract
) -> list[ValidationIssue]:
    size = _format_px(contract.canvas_size_px)
    width = attributes.get("width")
    height = attributes.get("height")
    if width is None or height is None:
        return [
            ValidationIssue(
                code=E2102_ROOT_SIZE_MISSING,
                file=file,
                line=line,
                message="root <svg> missing width/height attributes",
            )
        ]
    width_px = parse_px_length(width)
    height_px = parse_px_length(height)
    if width_px is None or height_px is None:
        return [
            ValidationIssue(
                code=E2103_ROOT_SIZE_INVALID,
                file=file,
                line=line,
                message=(
                    f"root <svg> width/height must be {size}px/{size}px "
                    f"(got width={width!r} height={height!r})"
                ),
            )
        ]
    tolerance = contract.canvas_tolerance_px
    if not close_enough(width_px, contract.canvas_size_px, tolerance) or not close_enough(
        height_px, contract.canvas_size_px, tolerance
    ):
        return [
            ValidationIssue(
                code=E2103_ROOT_SIZE_INVALID,
                file=file,
                line=line,
                message=(
                    f"root <svg> width/height must be {size}px/{size}px "
                    f"(got width={_format_px(width_px)}px height={_format_px(height_px)}px)"
                ),
            )
        ]
    return []


def _check_opacity(
    file: str,
    line: int,
    tag: str,
    prop: str,
    code: str,
    style: Mapping[str, str],
    contract: StyleContract,
) -> ValidationIssue | None:
    raw = style.get(prop, "").strip()
    if not raw:
        return ValidationIssue(code=code, file=file, line=line, message=f"<{tag}> missing {prop}")
    value = parse_number(raw)
    if value is None or not close_enough(value, contract.opacity, contract.opacity_tolerance):
        return ValidationIssue(
            code=code,
            file=file,
            line=line,
            message=f"<{tag}> {prop} must be {contract.opacity:g} (got {raw!r})",
        )
    return None


def _check_drawable(
    file: str, line: int, tag: str, style: Mapping[str, str], contract: StyleContract
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []

    fill = style.get("fill", "").strip().lower()
    stroke = style.get("stroke", "").strip().lower()
    if fill != contract.fill:
        issues.append(
            ValidationIssue(
                code=E2104_BAD_FILL,
                file=file,
                line=line,
                message=f"<{tag}> fill must be {contract.fill} (got {fill!r})",
            )
        )
    if stroke != contract.stroke:
        issues.append(
            ValidationIssue(
                code=E2105_BAD_STROKE,
                file=file,
                line=line,
                message=f"<{tag}> stroke must be {contract.stroke} (got {stroke!r})",
            )
        )

    raw_width = style.get("stroke-width", "").strip()
    if not raw_width:
        issues.append(
            ValidationIssue(
                code=E2106_BAD_STROKE_WIDTH,
                file=file,
                line=line,
                message=f"<{tag}> missing stroke-width",
            )
        )
    else:
        width = parse_number(raw_width)
        if width is None:
            issues.append(
                ValidationIssue(
                    code=E2106_BAD_STROKE_WIDTH,
                    file=file,
                    line=line,
                    message=f"<{tag}> invalid stroke-width {raw_width!r}",
                )
            )
        elif not close_enough(width, contract.stroke_width, contract.stroke_width_tolerance):
            issues.append(
                ValidationIssue(
                    code=E2106_BAD_STROKE_WIDTH,
                    file=file,
                    line=line,
                    message=(
                        f"<{tag}> stroke-width must be {contract.stroke_width:.8f} "
                        f"(got {width:.8f})"
                    ),
                )
            )

    for prop, code in (
        ("stroke-opacity", E2107_BAD_STROKE_OPACITY),
        ("fill-opacity", E2108_BAD_FILL_OPACITY),
    ):
        issue = _check_opacity(file, line, tag, prop, code, style, contract)
        if issue is not None:
            issues.append(issue)

    return issues


def validate_tokens(
    tokens: Iterable[Token],
    file: str,
    contract: StyleContract = DEFAULT_CONTRACT,
    stats: dict[str, int] | None = None,
) -> list[ValidationIssue]:
    """Run the style-compliance pass over a token stream.

    Two stacks track inherited state: ``hidden_stack`` holds the effective
    visibility of every open element and ``style_stack`` the effective style
    snapshot. Both get exactly one push per open and one pop per close, even
    inside skipped subtrees, so they always mirror the tree depth.
    ``skip_depth`` counts how deep we are inside a hidden or ``<defs>``
    subtree; nothing is checked while it is non-zero.
    """
    issues: list[ValidationIssue] = []
    hidden_stack: list[bool] = [False]
    style_stack: list[dict[str, str]] = [{}]
    skip_depth = 0
    seen_root = False
    counters = {"elements": 0, "drawables_checked": 0, "skipped_elements": 0}

    for token in tokens:
        if isinstance(token, ElementOpen):
            counters["elements"] += 1
            attributes = token.attributes
            parent_style = style_stack[-1]
            effective_hidden = hidden_stack[-1] or element_hidden(attributes)
            hidden_stack.append(effective_hidden)

            if skip_depth > 0:
                skip_depth += 1
                style_stack.append(parent_style)
                counters["skipped_elements"] += 1
                continue

            if effective_hidden or token.tag == DEFS_TAG:
                logger.debug(
                    "%s:%d: skipping <%s> subtree (%s)",
                    file,
                    token.line,
                    token.tag,
                    "hidden" if effective_hidden else "definitions",
                )
                skip_depth = 1
                style_stack.append(parent_style)
                counters["skipped_elements"] += 1
                continue

            style = merge_styles(parent_style, own_style(attributes))
            style_stack.append(style)

            if not seen_root and token.tag == ROOT_TAG:
                seen_root = True
                issues.extend(_check_root_canvas(file, token.line, attributes, contract))

            if token.tag == IMAGE_TAG:
                issues.append(
                    ValidationIssue(
                        code=E2109_VISIBLE_IMAGE,
                        file=file,
                        line=token.line,
                        message="visible <image> found (reference artwork must be hidden)",
                    )
                )
            elif token.tag in contract.drawable_elements:
                counters["drawables_checked"] += 1
                issues.extend(_check_drawable(file, token.line, token.tag, style, contract))

        elif isinstance(token, ElementClose):
            if len(hidden_stack) > 1:
                hidden_stack.pop()
            if len(style_stack) > 1:
                style_stack.pop()
            if skip_depth > 0:
                skip_depth -= 1

    if not seen_root:
        issues.append(
            ValidationIssue(
                code=E2101_ROOT_MISSING,
                file=file,
                line=1,
                message="no root <svg> element found",
            )
        )

    logger.debug(
        "%s: %d elements, %d drawables checked, %d issues",
        file,
        counters["elements"],
        counters["drawables_checked"],
        len(issues),
    )
    if stats is not None:
        stats.update(counters)
    return issues


def validate_svg(
    svg_path: Path | str, contract: StyleContract = DEFAULT_CONTRACT
) -> list[ValidationIssue]:
    """Validate one SVG file against ``contract``.

    Rule violations come back as issues; ``SvgCheckError`` is raised only
    when the file cannot be read or parsed, and no partial list is returned.
    """
    return validate_tokens(iter_tokens(svg_path), str(svg_path), contract)


def build_report(
    svg_path: Path | str, contract: StyleContract = DEFAULT_CONTRACT
) -> ValidationReport:
    stats: dict[str, int] = {}
    issues = validate_tokens(iter_tokens(svg_path), str(svg_path), contract, stats=stats)
    status = "pass" if not issues else "fail"
    return ValidationReport(status=status, errors=issues, stats=dict(stats))
