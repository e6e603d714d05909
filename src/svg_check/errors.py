from __future__ import annotations

from dataclasses import dataclass

E1000_PARSE_ERROR = "E1000_PARSE_ERROR"
E1001_CONFIG_ERROR = "E1001_CONFIG_ERROR"
E1003_IO_ERROR = "E1003_IO_ERROR"


@dataclass
class SvgCheckError(Exception):
    code: str
    message: str
    hint: str

    def __str__(self) -> str:
        return self.message
