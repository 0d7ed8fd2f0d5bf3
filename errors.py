# errors.py
from __future__ import annotations


class CharsetEncoderError(ValueError):
    """Base for every configuration failure raised by the encoder."""


# ── charset ───────────────────────────────────────────────────────
class MissingCharset(CharsetEncoderError):
    def __init__(self) -> None:
        super().__init__("CharsetEncoder requires a charset to initialize")


class DuplicateCharsetSymbol(CharsetEncoderError):
    def __init__(self, symbol: str) -> None:
        super().__init__("Charset cannot contain duplicate values")
        self.symbol = symbol


class UnmappableCharset(CharsetEncoderError):
    def __init__(self, size: int) -> None:
        super().__init__(
            f"Charset of length {size} has no self-reference-free mapping"
        )
        self.size = size


# ── mapping ───────────────────────────────────────────────────────
class MalformedMappingSyntax(CharsetEncoderError):
    def __init__(self) -> None:
        super().__init__("Mapping contains invalid values")


class MappingCharsetSizeMismatch(CharsetEncoderError):
    def __init__(self, pairs: int, size: int) -> None:
        super().__init__("Mapping does not match charset")
        self.pairs = pairs
        self.size = size


MappingChartsetSizeMismatch = MappingCharsetSizeMismatch


class MappingIndexOutOfBounds(CharsetEncoderError):
    def __init__(self, key: int, value: int) -> None:
        super().__init__("Mapping cannot contain invalid indexes")
        self.key = key
        self.value = value


class MappingSelfReference(CharsetEncoderError):
    def __init__(self, index: int) -> None:
        super().__init__("Mapping cannot contain self-references")
        self.index = index


class MappingDuplicateReference(CharsetEncoderError):
    """Raised for 0:1,...,23:1 (value reuse) as well as 0:1,0:2 (key reuse)."""

    def __init__(self, key: int, value: int) -> None:
        super().__init__("Mapping cannot contain duplicate references")
        self.key = key
        self.value = value


__all__ = [
    "CharsetEncoderError",
    "MissingCharset",
    "DuplicateCharsetSymbol",
    "UnmappableCharset",
    "MalformedMappingSyntax",
    "MappingCharsetSizeMismatch",
    "MappingChartsetSizeMismatch",
    "MappingIndexOutOfBounds",
    "MappingSelfReference",
    "MappingDuplicateReference",
]
