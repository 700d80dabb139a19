# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every validation failure raised by the machine."""


# ── alphabet & index contract ────────────────────────────────────
class InvalidAlphabet(EnigmaError):
    pass


class NotInAlphabet(EnigmaError):
    pass


class SymbolNotInAlphabet(NotInAlphabet):
    """A message symbol the configured alphabet does not contain."""


class OutOfRange(EnigmaError, IndexError):
    pass


# ── wiring ───────────────────────────────────────────────────────
class MalformedCycle(EnigmaError):
    pass


class ReflectorNotDerangement(EnigmaError):
    pass


# ── machine configuration ────────────────────────────────────────
class InvalidMachine(EnigmaError):
    pass


class UnknownRotor(EnigmaError):
    pass


class DuplicateRotor(EnigmaError):
    pass


class MisplacedRotor(EnigmaError):
    pass


class WrongSlotCount(EnigmaError):
    pass


class BadSettingLength(EnigmaError):
    pass


# ── text layer ───────────────────────────────────────────────────
class ConfigError(EnigmaError):
    """Configuration text that does not follow the expected layout."""


class SettingError(EnigmaError):
    """A malformed '*' setting line or message stream."""
