"""Streaming SVG tokenizer.

Turns a document into a flat sequence of ``ElementOpen`` / ``ElementClose``
events in document order, so the validator never needs the whole tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Union

from lxml import etree

from .errors import E1000_PARSE_ERROR, E1003_IO_ERROR, SvgCheckError
from .svg_checks import local_name


@dataclass(frozen=True)
class ElementOpen:
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    line: int = 1


@dataclass(frozen=True)
class ElementClose:
    tag: str = ""


Token = Union[ElementOpen, ElementClose]


def _attributes(element: etree._Element) -> dict[str, str]:
    attributes: dict[str, str] = {}
    for name, value in element.attrib.items():
        attributes.setdefault(local_name(name), value)
    return attributes


def iter_tokens(svg_path: Path | str) -> Iterator[Token]:
    """Yield open/close tokens for every element of ``svg_path``.

    Raises ``SvgCheckError`` when the file cannot be read or is not
    well-formed XML. The error may surface mid-iteration.
    """
    try:
        events = etree.iterparse(
            str(svg_path),
            events=("start", "end"),
            resolve_entities=False,
            no_network=True,
        )
        for event, element in events:
            tag = local_name(element.tag)
            if event == "start":
                yield ElementOpen(
                    tag=tag,
                    attributes=_attributes(element),
                    line=element.sourceline or 1,
                )
            else:
                yield ElementClose(tag=tag)
                element.clear(keep_tail=True)
    except etree.XMLSyntaxError as exc:
        raise SvgCheckError(
            code=E1000_PARSE_ERROR,
            message=f"xml parse error: {exc}",
            hint="Ensure the SVG is well-formed XML.",
        ) from exc
    except OSError as exc:
        raise SvgCheckError(
            code=E1003_IO_ERROR,
            message=f"cannot read {svg_path}: {exc}",
            hint="Check that the SVG path exists and is readable.",
        ) from exc
