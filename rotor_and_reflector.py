# rotor_and_reflector.py
from __future__ import annotations

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import OutOfRange, ReflectorNotDerangement

debug = Debug()
debug.disable("rotor")


class Rotor:
    """A wheel named NAME whose wiring at setting 0 is PERM.

    Plain rotors never move; subclasses decide how they step.
    """

    def __init__(self, name: str, perm: Permutation) -> None:
        self.name = name
        self.permutation = perm
        self.alphabet: Alphabet = perm.alphabet
        self.size = perm.size
        self._setting = 0

    # ── kind predicates ──────────────────────────────────────────
    def rotates(self) -> bool:
        return False

    def reflecting(self) -> bool:
        return False

    @property
    def notches(self) -> str:
        return ""

    # ── setting helpers ──────────────────────────────────────────
    @property
    def setting(self) -> int:
        return self._setting

    def set(self, posn: int | str) -> None:
        """Turn the wheel to POSN, an index or a window symbol."""
        if isinstance(posn, str):
            posn = self.alphabet.to_int(posn)
        if not (0 <= posn < self.size):
            raise OutOfRange(f"Setting {posn} out of range 0–{self.size - 1}")
        self._setting = posn

    # ── stepping --------------------------------------------------
    def at_notch(self) -> bool:
        return False

    def advance(self) -> None:
        pass

    # ── signal paths ---------------------------------------------
    def convert_forward(self, p: int) -> int:
        shift = self.permutation.wrap(p + self._setting)
        mapped = self.permutation.permute(shift)
        result = self.permutation.wrap(mapped - self._setting)
        debug.log("rotor", f"{self.name} fwd {p}->{result}")
        return result

    def convert_backward(self, e: int) -> int:
        shift = self.permutation.wrap(e + self._setting)
        mapped = self.permutation.invert(shift)
        result = self.permutation.wrap(mapped - self._setting)
        debug.log("rotor", f"{self.name} bwd {e}->{result}")
        return result

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} pos={self._setting}>"


class FixedRotor(Rotor):
    """A rotor that can be set but never advances (e.g. the M4 Beta wheel)."""


class MovingRotor(Rotor):
    def __init__(self, name: str, perm: Permutation, notches: str) -> None:
        super().__init__(name, perm)
        for ch in notches:
            # raises NotInAlphabet for a stray notch symbol
            self.alphabet.to_int(ch)
        self._notches = notches

    def rotates(self) -> bool:
        return True

    @property
    def notches(self) -> str:
        return self._notches

    def at_notch(self) -> bool:
        return self.alphabet.to_char(self._setting) in self._notches

    def advance(self) -> None:
        self._setting = (self._setting + 1) % self.size
        debug.log("stepping", f"{self.name} -> {self.alphabet.to_char(self._setting)}")


class Reflector(FixedRotor):
    """A fixed wheel with no self-mapped contacts that folds the signal back."""

    def __init__(self, name: str, perm: Permutation) -> None:
        if not perm.derangement():
            raise ReflectorNotDerangement(
                f"Reflector {name} maps a symbol to itself: {perm.cycles()!r}"
            )
        super().__init__(name, perm)

    def reflecting(self) -> bool:
        return True

    def set(self, posn: int | str) -> None:
        if isinstance(posn, str):
            posn = self.alphabet.to_int(posn)
        if posn != 0:
            raise OutOfRange(f"Reflector {self.name} has only one position")
