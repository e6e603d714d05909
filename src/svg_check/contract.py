from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

DRAWABLE_ELEMENTS = (
    "path",
    "rect",
    "circle",
    "ellipse",
    "polygon",
    "polyline",
    "line",
)


@dataclass(frozen=True)
class StyleContract:
    canvas_size_px: float = 70.0
    canvas_tolerance_px: float = 0.01
    fill: str = "#ffffff"
    stroke: str = "#000000"
    stroke_width: float = 0.26458333
    stroke_width_tolerance: float = 0.0005
    opacity: float = 1.0
    opacity_tolerance: float = 0.0001
    drawable_elements: frozenset[str] = frozenset(DRAWABLE_ELEMENTS)


DEFAULT_CONTRACT = StyleContract()


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of YAML: {path}")
    return data


def load_contract(path: Path) -> StyleContract:
    """Load a style contract, falling back to the built-in values per key."""
    data = _load_yaml(path)
    canvas = data.get("canvas", {}) or {}
    style = data.get("style", {}) or {}
    elements = data.get("elements", {}) or {}

    overrides: dict[str, Any] = {}
    try:
        if "size_px" in canvas:
            overrides["canvas_size_px"] = float(canvas["size_px"])
        if "tolerance_px" in canvas:
            overrides["canvas_tolerance_px"] = float(canvas["tolerance_px"])
        if "fill" in style:
            overrides["fill"] = str(style["fill"]).strip().lower()
        if "stroke" in style:
            overrides["stroke"] = str(style["stroke"]).strip().lower()
        if "stroke_width" in style:
            overrides["stroke_width"] = float(style["stroke_width"])
        if "stroke_width_tolerance" in style:
            overrides["stroke_width_tolerance"] = float(style["stroke_width_tolerance"])
        if "opacity" in style:
            overrides["opacity"] = float(style["opacity"])
        if "opacity_tolerance" in style:
            overrides["opacity_tolerance"] = float(style["opacity_tolerance"])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid contract values in {path}: {exc}") from exc

    drawables = elements.get("drawable")
    if drawables is not None:
        if not isinstance(drawables, list):
            raise ValueError(f"Expected a list for elements.drawable in {path}")
        overrides["drawable_elements"] = frozenset(str(name) for name in drawables)

    return replace(DEFAULT_CONTRACT, **overrides)
