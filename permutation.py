# permutation.py
from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from random import Random, SystemRandom
from typing import Protocol

from debug import Debug
from errors import (
    MalformedMappingSyntax,
    MappingCharsetSizeMismatch,
    MappingDuplicateReference,
    MappingIndexOutOfBounds,
    MappingSelfReference,
    UnmappableCharset,
)

debug = Debug()
debug.disable("mapping", "generator")

# ── mapping text grammar ──────────────────────────────────────────
_invalid_re = re.compile(r"[^0-9:,]")
_pair_re = re.compile(r"[0-9]+:[0-9]+")

STRATEGIES = ("rejection", "sattolo")


def _field(raw: str) -> int:
    """Digits → index; an empty field reads as 0."""
    return int(raw) if raw else 0


class IndexSource(Protocol):
    """Anything that hands out a uniform index in ``[0, stop)``."""

    def randrange(self, stop: int) -> int: ...


class Direction(Enum):
    ENCODE = "encode"
    DECODE = "decode"


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


class Permutation:
    """Index bijection with its inverse, fixed at construction.

    Both directions are derived from one ``forward`` table, so the encode and
    decode views cannot drift apart.  Instances are never mutated; replacing
    an encoder's mapping means swapping in a new ``Permutation``.
    """

    __slots__ = ("_fwd", "_rev")

    def __init__(self, forward: Mapping[int, int]) -> None:
        fwd = dict(forward)
        rev = {v: k for k, v in fwd.items()}
        if len(rev) != len(fwd):
            raise ValueError("forward map must be one-to-one")
        self._fwd: dict[int, int] = fwd
        self._rev: dict[int, int] = rev

    # ── builders ─────────────────────────────────────────────────
    @classmethod
    def generate(
        cls,
        size: int,
        rng: IndexSource | None = None,
        strategy: str = "rejection",
    ) -> "Permutation":
        """Random derangement of ``range(size)``.

        ``rejection`` pairs random unused keys with random unused values and
        throws away self-pairs; ``sattolo`` runs Sattolo's shuffle, which
        always yields one cycle through every index.
        """
        if size < 2:
            raise UnmappableCharset(size)
        if strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown strategy {strategy!r}. Expected one of {list(STRATEGIES)}"
            )
        rng = rng if rng is not None else build_rng(None)

        if strategy == "sattolo":
            forward = _sattolo(size, rng)
        else:
            forward = _rejection_sample(size, rng)

        perm = cls(forward)
        assert perm.is_derangement() and perm.is_complete(), "generator produced a bad mapping"
        return perm

    @classmethod
    def parse(cls, text: str, size: int) -> "Permutation":
        """Parse ``key1:value1,key2:value2,...`` against a charset of *size*.

        Pairs are checked in textual order, so the first pair that collides
        with an earlier one is the one reported.
        """
        if _invalid_re.search(text):
            raise MalformedMappingSyntax()

        pairs = len(_pair_re.findall(text))
        if pairs != size:
            raise MappingCharsetSizeMismatch(pairs, size)

        # a key without a value field still claims the key (value None)
        forward: dict[int, int | None] = {}
        inverse: dict[int | None, int] = {}
        for entry in text.split(","):
            parts = entry.split(":")
            key = _field(parts[0])
            value = _field(parts[1]) if len(parts) > 1 else None

            # an index equal to size slips through; only larger ones are refused
            if key > size or (value is not None and value > size):
                raise MappingIndexOutOfBounds(key, value)
            if key == value:
                raise MappingSelfReference(key)
            if key in forward or value in inverse:
                raise MappingDuplicateReference(key, value)

            forward[key] = value
            inverse[value] = key

        debug.log("mapping", f"parsed {len(forward)} pairs")
        return cls({k: v for k, v in forward.items() if v is not None})

    # ── signal paths ─────────────────────────────────────────────
    def forward(self, index: int) -> int | None:
        return self._fwd.get(index)

    def apply(self, direction: Direction, index: int) -> int | None:
        if direction is Direction.ENCODE:
            return self._fwd.get(index)
        return self._rev.get(index)

    # ── serialisation ────────────────────────────────────────────
    def export(self) -> str:
        return ",".join(f"{k}:{v}" for k, v in self.items())

    def items(self) -> list[tuple[int, int]]:
        return sorted(self._fwd.items())

    # ── properties ───────────────────────────────────────────────
    @property
    def size(self) -> int:
        return len(self._fwd)

    def is_derangement(self) -> bool:
        return all(k != v for k, v in self._fwd.items())

    def is_complete(self) -> bool:
        """True if keys and values are both exactly ``range(size)``."""
        expected = set(range(len(self._fwd)))
        return set(self._fwd) == expected and set(self._rev) == expected

    # ── niceties ─────────────────────────────────────────────────
    def __len__(self) -> int:
        return len(self._fwd)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Permutation):
            return self._fwd == other._fwd
        return NotImplemented

    def __repr__(self) -> str:
        return f"<Permutation size={self.size} {self.export()!r}>"


# ─── generators ─────────────────────────────────────────────────────────


def _rejection_sample(size: int, rng: IndexSource) -> dict[int, int]:
    attempt = 0
    while True:
        attempt += 1
        forward: dict[int, int] = {}
        inverse: dict[int, int] = {}
        unused_keys = list(range(size))
        unused_values = list(range(size))

        while len(forward) < size:
            # a lone leftover index can only pair with itself: start over
            if len(unused_keys) == 1 and unused_keys[0] == unused_values[0]:
                debug.log("generator", f"dead end at {unused_keys[0]}, attempt {attempt}")
                break

            key_index = rng.randrange(len(unused_keys))
            value_index = rng.randrange(len(unused_values))
            key = unused_keys[key_index]
            value = unused_values[value_index]

            if key == value or key in forward or value in inverse:
                continue

            forward[key] = value
            inverse[value] = key
            del unused_keys[key_index]
            del unused_values[value_index]
        else:
            debug.log("generator", f"rejection sampling done after {attempt} attempt(s)")
            return forward


def _sattolo(size: int, rng: IndexSource) -> dict[int, int]:
    items = list(range(size))
    for i in range(size - 1, 0, -1):
        j = rng.randrange(i)
        items[i], items[j] = items[j], items[i]
    debug.log("generator", f"sattolo cycle of {size}")
    return dict(enumerate(items))
