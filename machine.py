# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from copy import copy
from dataclasses import dataclass

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import (
    BadSettingLength,
    DuplicateRotor,
    InvalidMachine,
    MisplacedRotor,
    OutOfRange,
    SymbolNotInAlphabet,
    UnknownRotor,
    WrongSlotCount,
)
from rotor_and_reflector import Rotor

debug = Debug()
debug.disable("stepping")


@dataclass(slots=True)
class Step:
    """What one keystroke did, as handed to an observer."""

    settings: str       # window symbols of slots 1.. after stepping
    symbol_in: str
    plugged_in: str     # after the first plugboard pass
    rotor_out: str      # after the rotor stack, before the plugboard
    symbol_out: str


class Machine:
    """A rotor machine with NUM_ROTORS slots and NUM_PAWLS pawls.

    Slot 0 holds the reflector and slot NUM_ROTORS - 1 the fast rotor.
    ALL_ROTORS is the catalog insert_rotors draws from.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        num_pawls: int,
        all_rotors: Iterable[Rotor],
        observer: Callable[[Step], None] | None = None,
    ) -> None:
        if num_rotors < 2:
            raise InvalidMachine(f"Need at least 2 rotor slots, got {num_rotors}")
        if not (0 < num_pawls <= num_rotors):
            raise InvalidMachine(
                f"Pawl count {num_pawls} must be in 1–{num_rotors}"
            )

        self.alphabet = alphabet
        self._num_rotors = num_rotors
        self._num_pawls = num_pawls

        self._all_rotors: dict[str, Rotor] = {}
        for rotor in all_rotors:
            if rotor.name in self._all_rotors:
                raise DuplicateRotor(f"Rotor {rotor.name!r} defined twice")
            if rotor.alphabet != alphabet:
                raise InvalidMachine(f"Rotor {rotor.name!r} uses a different alphabet")
            self._all_rotors[rotor.name] = rotor

        self._rotors: tuple[Rotor, ...] = ()
        self._plugboard = Permutation("", alphabet)
        self.observer = observer

    # ── accessors ───────────────────────────────────────────────
    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._num_pawls

    @property
    def plugboard(self) -> Permutation:
        return self._plugboard

    @property
    def available_rotors(self) -> list[str]:
        return list(self._all_rotors)

    def get_rotor(self, k: int) -> Rotor:
        """Rotor in slot K; slot 0 is the reflector."""
        return self._rotors[k]

    def settings(self) -> str:
        """Window symbols of every slot right of the reflector."""
        return "".join(self.alphabet.to_char(r.setting) for r in self._rotors[1:])

    # ── configuration ───────────────────────────────────────────
    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with fresh copies of the named catalog rotors,
        all at setting 0. NAMES[0] names the reflector."""
        if len(names) != self._num_rotors:
            raise WrongSlotCount(
                f"Expected {self._num_rotors} rotors, got {len(names)}"
            )
        if len(set(names)) != len(names):
            dup = next(n for n in names if names.count(n) > 1)
            raise DuplicateRotor(f"Rotor {dup!r} inserted twice")

        rotors: list[Rotor] = []
        for slot, name in enumerate(names):
            try:
                rotor = copy(self._all_rotors[name])
            except KeyError:
                raise UnknownRotor(f"No rotor named {name!r}")
            if rotor.reflecting() != (slot == 0):
                where = "slot 0 needs a reflector" if slot == 0 else f"reflector in slot {slot}"
                raise MisplacedRotor(f"Rotor {name!r}: {where}")
            rotor.set(0)
            rotors.append(rotor)

        self._rotors = tuple(rotors)
        debug.log("stepping", f"Inserted {list(names)}")

    def set_rotors(self, setting: Sequence[int | str]) -> None:
        """Set slots 1.. from SETTING; the first entry is the leftmost
        rotor right of the reflector."""
        if len(setting) != self._num_rotors - 1:
            raise BadSettingLength(
                f"Setting {setting!r} must have {self._num_rotors - 1} symbols"
            )
        if not self._rotors:
            raise WrongSlotCount("No rotors inserted")
        # resolve every entry before any rotor turns
        positions = [
            self.alphabet.to_int(posn) if isinstance(posn, str) else posn
            for posn in setting
        ]
        for posn in positions:
            if not (0 <= posn < self.alphabet.size):
                raise OutOfRange(
                    f"Setting {posn} out of range 0–{self.alphabet.size - 1}"
                )
        for rotor, posn in zip(self._rotors[1:], positions):
            rotor.set(posn)

    def set_plugboard(self, plugboard: Permutation | str) -> None:
        if isinstance(plugboard, str):
            plugboard = Permutation(plugboard, self.alphabet)
        elif plugboard.alphabet != self.alphabet:
            raise InvalidMachine("Plugboard uses a different alphabet")
        self._plugboard = plugboard

    # ── stepping logic  ─────────────────────────────────────────
    def _step_rotors(self) -> None:
        """Advance rotors for one key-press.

        Every decision reads the settings from before this key-press, then
        the chosen rotors move together.
        """
        n = self._num_rotors
        first = max(1, n - self._num_pawls)     # leftmost pawl-driven slot
        notched = [r.at_notch() for r in self._rotors]

        step = [False] * n
        step[n - 1] = True
        for k in range(first, n - 1):
            if notched[k + 1]:
                # the pawl drops into k+1's notch and pushes both wheels
                step[k] = True
                step[k + 1] = True

        for rotor, go in zip(self._rotors, step):
            if go:
                rotor.advance()

    # ── encipher  ───────────────────────────────────────────────
    def _apply_rotors(self, c: int) -> int:
        for rotor in reversed(self._rotors):
            c = rotor.convert_forward(c)

        for rotor in self._rotors[1:]:
            c = rotor.convert_backward(c)
        return c

    def _convert_index(self, c: int) -> int:
        if not self._rotors:
            raise WrongSlotCount("No rotors inserted")
        self._step_rotors()
        debug.log("stepping", f"Rotor pos [{self.settings()}]")

        plugged = self._plugboard.permute(c)
        mapped = self._apply_rotors(plugged)
        out = self._plugboard.permute(mapped)
        debug.log("plugboard", f"{c}->{plugged} ... {mapped}->{out}")

        if self.observer is not None:
            to_char = self.alphabet.to_char
            self.observer(
                Step(self.settings(), to_char(self._plugboard.wrap(c)),
                     to_char(plugged), to_char(mapped), to_char(out))
            )
        return out

    def convert(self, msg: int | str) -> int | str:
        """Encipher MSG, an index or a whole message, stepping first for
        every symbol. Not idempotent: rotor settings carry over."""
        if isinstance(msg, int):
            return self._convert_index(msg)

        for ch in msg:
            if ch not in self.alphabet:
                raise SymbolNotInAlphabet(
                    f"Symbol {ch!r} is not in alphabet {str(self.alphabet)!r}"
                )
        return "".join(
            self.alphabet.to_char(self._convert_index(self.alphabet.to_int(ch)))
            for ch in msg
        )

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self._rotors)
        return f"<Machine [{names}] {self.settings()} {self._plugboard!r}>"
