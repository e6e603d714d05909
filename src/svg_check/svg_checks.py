from __future__ import annotations

import math
import re
from typing import Mapping

NUMBER_RE = re.compile(r"^[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?$")

STYLE_PROPERTIES = (
    "fill",
    "stroke",
    "stroke-width",
    "stroke-opacity",
    "fill-opacity",
)

UNIT_SUFFIX = "px"


def local_name(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def parse_style(style: str) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for chunk in style.split(";"):
        chunk = chunk.strip()
        if not chunk or ":" not in chunk:
            continue
        key, value = chunk.split(":", 1)
        parsed[key.strip().lower()] = value.strip()
    return parsed


def element_hidden(attributes: Mapping[str, str]) -> bool:
    """True when the element hides itself; ancestors are tracked by the caller."""
    if attributes.get("display", "").strip() == "none":
        return True
    if attributes.get("visibility", "").strip() == "hidden":
        return True
    style = attributes.get("style")
    if style is not None:
        inline = parse_style(style)
        if inline.get("display", "").strip() == "none":
            return True
        if inline.get("visibility", "").strip() == "hidden":
            return True
    return False


def own_style(attributes: Mapping[str, str]) -> dict[str, str]:
    # Presentation attributes win over the inline style declaration.
    declared: dict[str, str] = {}
    style = attributes.get("style")
    if style is not None:
        inline = parse_style(style)
        declared.update((prop, inline[prop]) for prop in STYLE_PROPERTIES if prop in inline)
    for prop in STYLE_PROPERTIES:
        if prop in attributes:
            declared[prop] = attributes[prop]
    return declared


def merge_styles(parent: Mapping[str, str], child: Mapping[str, str]) -> dict[str, str]:
    merged = dict(parent)
    merged.update(child)
    return merged


def _strip_unit(value: str) -> str:
    value = value.strip()
    if value.lower().endswith(UNIT_SUFFIX):
        value = value[: -len(UNIT_SUFFIX)].strip()
    return value


def parse_number(value: str) -> float | None:
    raw = _strip_unit(value)
    if not NUMBER_RE.match(raw):
        return None
    try:
        number = float(raw)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_px_length(value: str) -> float | None:
    # Plain numbers count as px.
    return parse_number(value)


def close_enough(a: float, b: float, tolerance: float) -> bool:
    return abs(a - b) <= tolerance
