# utilities.py
from __future__ import annotations

import json
from pathlib import Path
from typing import List

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import ConfigError, SettingError
from machine import Machine
from rotor_and_reflector import FixedRotor, MovingRotor, Reflector, Rotor

debug = Debug()
debug.disable("config")


# ────────────────────────────────────────────────────────────────────────
#  0. Wheel builders
# ────────────────────────────────────────────────────────────────────────


def make_rotor(name: str, kind: str, cycles: str, alphabet: Alphabet) -> Rotor:
    """Build one catalog wheel from its type tag.

    KIND is ``M`` followed by the notch symbols, ``N`` for a fixed rotor or
    ``R`` for a reflector.
    """
    perm = Permutation(cycles, alphabet)
    tag, notches = kind[:1], kind[1:]
    debug.log("config", f"Rotor {name} [{kind}] {perm.cycles()}")

    if tag == "M":
        return MovingRotor(name, perm, notches)
    if notches:
        raise ConfigError(f"Rotor {name}: only moving rotors take notches ({kind!r})")
    if tag == "N":
        return FixedRotor(name, perm)
    if tag == "R":
        return Reflector(name, perm)
    raise ConfigError(f"Rotor {name}: unknown type {kind!r}")


# ────────────────────────────────────────────────────────────────────────
#  1. Configuration text
# ────────────────────────────────────────────────────────────────────────


def _read_count(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ConfigError(f"Expected the {what} as a number, got {token!r}")


def read_config(text: str) -> Machine:
    """Return a Machine described by configuration TEXT.

    Layout: the alphabet on the first line, then the slot and pawl counts,
    then one ``NAME TYPE (CYCLES)...`` description per rotor. A rotor's
    cycles may run on over following lines.
    """
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise ConfigError("configuration file truncated")

    alphabet = Alphabet(lines[0].strip())
    tokens = " ".join(lines[1:]).split()
    if len(tokens) < 2:
        raise ConfigError("configuration file truncated")

    num_rotors = _read_count(tokens[0], "number of rotor slots")
    num_pawls = _read_count(tokens[1], "number of pawls")

    rotors: List[Rotor] = []
    rest = tokens[2:]
    i = 0
    while i < len(rest):
        name = rest[i]
        if name.startswith("("):
            raise ConfigError(f"Cycle {name!r} does not follow a rotor name")
        if i + 1 >= len(rest) or rest[i + 1].startswith("("):
            raise ConfigError(f"bad rotor description for {name!r}: missing type")
        kind = rest[i + 1]
        i += 2
        cycles: List[str] = []
        while i < len(rest) and rest[i].startswith("("):
            cycles.append(rest[i])
            i += 1
        rotors.append(make_rotor(name, kind, " ".join(cycles), alphabet))

    debug.log("config", f"{num_rotors} slots, {num_pawls} pawls, {len(rotors)} rotors")
    return Machine(alphabet, num_rotors, num_pawls, rotors)


def read_config_json(data: dict) -> Machine:
    """Same as read_config for the JSON layout:
    ``{"alphabet", "rotors", "pawls", "catalog": {name: {"type", "notches", "cycles"}}}``."""
    required = {"alphabet", "rotors", "pawls", "catalog"}
    missing = required - data.keys()
    if missing:
        raise ConfigError(f"Missing keys in config: {', '.join(sorted(missing))}")

    for key in ("rotors", "pawls"):
        if not isinstance(data[key], int):
            raise ConfigError(f"Expected {key!r} as a number, got {data[key]!r}")

    alphabet = Alphabet(data["alphabet"])
    rotors: List[Rotor] = []
    for name, entry in data["catalog"].items():
        if "type" not in entry:
            raise ConfigError(f"bad rotor description for {name!r}: missing type")
        kind = entry["type"] + entry.get("notches", "")
        rotors.append(make_rotor(name, kind, entry.get("cycles", ""), alphabet))

    return Machine(alphabet, data["rotors"], data["pawls"], rotors)


def load_config(path: str | Path) -> Machine:
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as excp:
            raise ConfigError(f"{path}: {excp}")
        return read_config_json(data)
    return read_config(text)


# ────────────────────────────────────────────────────────────────────────
#  2. Setting lines & message text
# ────────────────────────────────────────────────────────────────────────


def is_setting_line(line: str) -> bool:
    return line.lstrip().startswith("*")


def apply_settings(machine: Machine, line: str) -> None:
    """Configure MACHINE from a ``* ROTORS... SETTING [PLUGBOARD]`` line."""
    if not is_setting_line(line):
        raise SettingError(f"Not a setting line: {line!r}")

    tokens = line.strip()[1:].split()
    n = machine.num_rotors
    if len(tokens) < n + 1:
        raise SettingError(
            f"Setting line needs {n} rotor names and a setting: {line!r}"
        )

    machine.insert_rotors(tokens[:n])
    machine.set_rotors(tokens[n])
    machine.set_plugboard(" ".join(tokens[n + 1:]))
    debug.log("config", f"Set up {machine!r}")


def preprocess_message(msg: str) -> str:
    """Drop the whitespace between message words."""
    return "".join(msg.split())


def group_blocks(msg: str, block: int = 5) -> str:
    """Return MSG in space-separated groups of BLOCK symbols (the last
    group may be shorter)."""
    blocks = [msg[i : i + block] for i in range(0, len(msg), block)]
    return " ".join(blocks)


__all__: List[str] = [
    "make_rotor",
    "read_config",
    "read_config_json",
    "load_config",
    "is_setting_line",
    "apply_settings",
    "preprocess_message",
    "group_blocks",
]

