# charset.py
from __future__ import annotations

from collections.abc import Iterable

from debug import Debug
from errors import DuplicateCharsetSymbol, MissingCharset

debug = Debug()
debug.disable("charset")


class Charset:
    """Ordered, duplicate-free alphabet; a symbol's position is its index."""

    def __init__(self, symbols: str | Iterable[str] | None) -> None:
        if symbols is None:
            raise MissingCharset()
        alphabet = symbols if isinstance(symbols, str) else "".join(symbols)
        if not alphabet:
            raise MissingCharset()

        index: dict[str, int] = {}
        for i, ch in enumerate(alphabet):
            if ch in index:
                debug.log("charset", f"duplicate {ch!r} at {index[ch]} and {i}")
                raise DuplicateCharsetSymbol(ch)
            index[ch] = i

        self.alphabet: str = alphabet
        self.alpha_to_index: dict[str, int] = index
        debug.log("charset", f"accepted {len(alphabet)} symbols")

    # symbol → index, None when outside the alphabet
    def index_of(self, symbol: str) -> int | None:
        return self.alpha_to_index.get(symbol)

    # index → symbol, None when the index names no symbol
    def symbol_at(self, index: int | None) -> str | None:
        if index is None or not (0 <= index < len(self.alphabet)):
            return None
        return self.alphabet[index]

    # ── niceties ──────────────────────────────────────────────────
    def __len__(self) -> int:
        return len(self.alphabet)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.alpha_to_index

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Charset):
            return self.alphabet == other.alphabet
        return NotImplemented

    def __str__(self) -> str:
        return self.alphabet

    def __repr__(self) -> str:
        return f"<Charset {self.alphabet!r}>"
