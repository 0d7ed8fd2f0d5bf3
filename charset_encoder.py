# charset_encoder.py  ──────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from charset import Charset
from debug import Debug
from errors import MissingCharset
from permutation import Direction, IndexSource, Permutation

debug = Debug()
debug.disable("translate")


class CharsetEncoder:
    """Encodes & decodes messages based on a supplied character set.

    When *mapping* is given the encoder is built from it, otherwise a random
    self-reference-free mapping is generated over the charset indexes.
    """

    def __init__(
        self,
        charset: str | Iterable[str] | None,
        mapping: str | None = None,
        *,
        rng: IndexSource | None = None,
        strategy: str = "rejection",
    ) -> None:
        self.rng = rng
        self.strategy = strategy
        self.reset(charset, mapping)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None, **kwargs: Any) -> "CharsetEncoder":
        """Build from an options dict with ``charset`` and optional ``mapping``."""
        if not options or not options.get("charset"):
            raise MissingCharset()
        return cls(options["charset"], options.get("mapping"), **kwargs)

    # ── setup helpers ───────────────────────────────────────────

    def reset(self, charset: str | Iterable[str] | None, mapping: str | None = None) -> None:
        """Replace charset and mapping together; nothing changes on failure."""
        new_charset = Charset(charset)
        if mapping:
            perm = Permutation.parse(mapping, len(new_charset))
        else:
            perm = Permutation.generate(len(new_charset), self.rng, self.strategy)
        self.charset = new_charset
        self.permutation = perm

    def set_charset(self, charset: str | Iterable[str] | None) -> None:
        """Swap the charset and draw a fresh mapping for it."""
        self.reset(charset)

    def generate_mapping(self) -> None:
        self.permutation = Permutation.generate(len(self.charset), self.rng, self.strategy)

    def import_mapping(self, mapping: str) -> None:
        """Import a mapping with format key1:value1,key2:value2,...keyN:valueN."""
        self.permutation = Permutation.parse(mapping, len(self.charset))

    def export_mapping(self) -> str:
        return self.permutation.export()

    # ── translation ─────────────────────────────────────────────

    def encode(self, message: str) -> str:
        return self.translate(message, Direction.ENCODE)

    def decode(self, message: str) -> str:
        return self.translate(message, Direction.DECODE)

    def translate(self, message: str, direction: Direction) -> str:
        charset, perm = self.charset, self.permutation
        out: list[str] = []
        for ch in message:
            index = charset.index_of(ch)
            mapped = None if index is None else charset.symbol_at(perm.apply(direction, index))
            out.append(ch if mapped is None else mapped)
        result = "".join(out)
        debug.log("translate", f"{direction.value} {message!r} -> {result!r}")
        return result

    def __repr__(self) -> str:
        return f"<CharsetEncoder charset={self.charset.alphabet!r} size={len(self.charset)}>"
