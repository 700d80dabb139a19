# alphabet_and_permutation.py
from __future__ import annotations

import re
from collections.abc import Iterator

from errors import InvalidAlphabet, MalformedCycle, NotInAlphabet, OutOfRange


# characters the configuration grammar gives a meaning to
RESERVED = frozenset("()*")

_group_re = re.compile(r"\s*\(([^()]*)\)")


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """An ordered set of symbols, each identified by its index."""

    def __init__(self, chars: str) -> None:
        if not chars:
            raise InvalidAlphabet("Alphabet must contain at least one symbol")
        for ch in chars:
            if ch in RESERVED or ch.isspace():
                raise InvalidAlphabet(f"Reserved character {ch!r} in alphabet")

        self._chars: str = chars
        self.alpha_to_index: dict[str, int] = {}
        for i, ch in enumerate(chars):
            if ch in self.alpha_to_index:
                raise InvalidAlphabet(f"Duplicate symbol {ch!r} in alphabet")
            self.alpha_to_index[ch] = i

    @property
    def size(self) -> int:
        return len(self._chars)

    # symbol → integer index
    def to_int(self, symbol: str) -> int:
        try:
            return self.alpha_to_index[symbol]
        except KeyError:
            raise NotInAlphabet(
                f"Symbol {symbol!r} is not in alphabet {self._chars!r}"
            )

    # integer index → symbol
    def to_char(self, index: int) -> str:
        if not (0 <= index < self.size):
            raise OutOfRange(f"Index {index} out of range 0–{self.size - 1}")
        return self._chars[index]

    def contains(self, symbol: str) -> bool:
        return symbol in self.alpha_to_index

    # ── niceties --------------------------------------------------
    __contains__ = contains

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[str]:
        return iter(self._chars)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._chars == other._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __str__(self) -> str:
        return self._chars

    def __repr__(self) -> str:
        return f"<Alphabet {self._chars!r}>"


# ── Permutation ───────────────────────────────────────────────────
def parse_cycles(text: str) -> list[str]:
    """Split cycle notation such as ``(AB) (CDE)`` into ``["AB", "CDE"]``.

    Whitespace is ignored, inside groups as well as between them.
    """
    groups: list[str] = []
    text = text.rstrip()
    pos = 0
    while pos < len(text):
        m = _group_re.match(text, pos)
        if m is None:
            raise MalformedCycle(f"Bad cycle notation near {text[pos:]!r}")
        groups.append("".join(m.group(1).split()))
        pos = m.end()
    return groups


class Permutation:
    """A bijection over the indices of an alphabet, built from cycle notation.

    Symbols that appear in no cycle map to themselves. Both directions are
    resolved into lookup tables once, so `permute` and `invert` are plain
    list indexing.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        size = alphabet.size

        fwd = list(range(size))
        seen: set[str] = set()
        for group in parse_cycles(cycles):
            for ch in group:
                if ch not in alphabet:
                    raise MalformedCycle(f"Symbol {ch!r} in {cycles!r} is not in alphabet")
                if ch in seen:
                    raise MalformedCycle(f"Symbol {ch!r} appears twice in {cycles!r}")
                seen.add(ch)

            idx = [alphabet.to_int(ch) for ch in group]
            for a, b in zip(idx, idx[1:] + idx[:1]):
                fwd[a] = b

        rev = [0] * size
        for i, j in enumerate(fwd):
            rev[j] = i

        # integer lookup tables
        self._fwd: tuple[int, ...] = tuple(fwd)
        self._rev: tuple[int, ...] = tuple(rev)

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def size(self) -> int:
        return self._alphabet.size

    def wrap(self, p: int) -> int:
        """Return P reduced modulo the alphabet size."""
        return p % self.size

    # ── mapping -------------------------------------------------
    def permute(self, p: int | str) -> int | str:
        if isinstance(p, str):
            return self._alphabet.to_char(self._fwd[self._alphabet.to_int(p)])
        return self._fwd[self.wrap(p)]

    def invert(self, c: int | str) -> int | str:
        if isinstance(c, str):
            return self._alphabet.to_char(self._rev[self._alphabet.to_int(c)])
        return self._rev[self.wrap(c)]

    def derangement(self) -> bool:
        """True iff no index maps to itself."""
        return all(i != j for i, j in enumerate(self._fwd))

    def cycles(self) -> str:
        """Canonical cycle notation, fixed points omitted."""
        out: list[str] = []
        visited = [False] * self.size
        for start in range(self.size):
            if visited[start] or self._fwd[start] == start:
                continue
            group = []
            i = start
            while not visited[i]:
                visited[i] = True
                group.append(self._alphabet.to_char(i))
                i = self._fwd[i]
            out.append("(" + "".join(group) + ")")
        return " ".join(out)

    # nicety for debugging
    def __repr__(self) -> str:
        return f"<Permutation {self.cycles() or 'identity'}>"
