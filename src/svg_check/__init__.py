"""Style-compliance checks for sprite source SVGs."""

from .contract import DEFAULT_CONTRACT, StyleContract, load_contract
from .errors import SvgCheckError
from .report import ValidationIssue, ValidationReport
from .tokens import ElementClose, ElementOpen, iter_tokens
from .validate import build_report, validate_svg, validate_tokens

__all__ = [
    "DEFAULT_CONTRACT",
    "ElementClose",
    "ElementOpen",
    "StyleContract",
    "SvgCheckError",
    "ValidationIssue",
    "ValidationReport",
    "build_report",
    "iter_tokens",
    "load_contract",
    "validate_svg",
    "validate_tokens",
]
