import pytest

from alphabet_and_permutation import Permutation
from errors import (
    BadSettingLength,
    DuplicateRotor,
    InvalidMachine,
    MisplacedRotor,
    NotInAlphabet,
    OutOfRange,
    ReflectorNotDerangement,
    SymbolNotInAlphabet,
    UnknownRotor,
    WrongSlotCount,
)
from machine import Machine
from rotor_and_reflector import MovingRotor, Reflector
from utilities import apply_settings

HIAWATHA = "FROMHISSHOULDERHIAWATHATOOKTHECAMERAOFROSEWOOD"


def test_enigma_i_reference_vector(enigma_i):
    assert enigma_i.convert("AAAAA") == "BDZGO"
    assert enigma_i.settings() == "AAF"


def test_double_step_sequence(enigma_i):
    enigma_i.set_rotors("ADU")
    seen = []
    for _ in range(3):
        enigma_i.convert(0)
        seen.append(enigma_i.settings())
    assert seen == ["ADV", "AEW", "BFX"]


def test_middle_rotor_at_notch_steps_three_wheels(naval):
    naval.insert_rotors(["B", "Beta", "III", "IV", "I"])
    naval.set_rotors("AAJA")                  # IV notches at J
    naval.convert(0)
    assert naval.settings() == "ABKB"


def test_golden_small_machine(small_machine):
    assert small_machine.convert("ABCDE") == "CAECB"
    assert small_machine.settings() == "AA"


def test_only_pawl_slots_move(abcde):
    def build(pawls):
        rotors = [
            Reflector("R", Permutation("(AB) (CDE)", abcde)),
            MovingRotor("M1", Permutation("(ACBED)", abcde), "A"),
            MovingRotor("M2", Permutation("(AB)", abcde), "A"),
        ]
        m = Machine(abcde, 3, pawls, rotors)
        m.insert_rotors(["R", "M1", "M2"])
        m.set_rotors("AA")
        m.convert("AAAAA")
        return m.settings()

    assert build(1) == "AA"
    assert build(2) == "BA"


def test_five_symbol_reflector_with_fixed_point_is_rejected(abcde):
    with pytest.raises(ReflectorNotDerangement):
        Reflector("R", Permutation("(AB)(CD)(E)", abcde))


def test_self_reciprocal(naval):
    line = "* B Beta III IV I AXLE (HQ) (EX) (IP) (TR) (BY)"
    apply_settings(naval, line)
    cipher = naval.convert(HIAWATHA)
    assert cipher != HIAWATHA
    apply_settings(naval, line)
    assert naval.convert(cipher) == HIAWATHA


def test_no_letter_encrypts_to_itself(naval):
    apply_settings(naval, "* C Gamma VI VII VIII ZZZZ")
    assert "A" not in naval.convert("A" * 200)


def test_plugboard_swaps_only_its_pair(enigma_i):
    plain = enigma_i
    plugged = Machine(plain.alphabet, 4, 3, [plain.get_rotor(k) for k in range(4)])
    plugged.insert_rotors(["B", "I", "II", "III"])
    plugged.set_plugboard("(AB)")
    swap = {"A": "B", "B": "A"}

    for ch in "ABCXYZ":
        plain.set_rotors("AAA")
        plugged.set_rotors("AAA")
        expected = plain.convert(swap.get(ch, ch))
        assert plugged.convert(ch) == swap.get(expected, expected)


def test_bad_symbol_fails_before_any_step(enigma_i):
    with pytest.raises(SymbolNotInAlphabet):
        enigma_i.convert("AB?C")
    assert enigma_i.settings() == "AAA"


def test_index_conversion_wraps(enigma_i):
    assert enigma_i.convert(26) == 1          # A -> B at AAA


def test_observer_sees_every_keystroke(enigma_i):
    steps = []
    enigma_i.observer = steps.append
    out = enigma_i.convert("AAAAA")
    assert len(steps) == 5
    first = steps[0]
    assert (first.settings, first.symbol_in, first.symbol_out) == ("AAB", "A", "B")
    assert "".join(s.symbol_out for s in steps) == out


def test_catalog_is_not_mutated(abcde, small_catalog):
    first = Machine(abcde, 3, 1, small_catalog)
    second = Machine(abcde, 3, 1, small_catalog)
    for m in (first, second):
        m.insert_rotors(["R", "F", "M"])
        m.set_rotors("AA")
    first.convert("ABC")
    assert first.settings() == "AD"
    assert second.settings() == "AA"
    assert small_catalog[2].setting == 0


def test_insert_rotor_errors(naval):
    with pytest.raises(WrongSlotCount):
        naval.insert_rotors(["B", "Beta", "I", "II"])
    with pytest.raises(UnknownRotor):
        naval.insert_rotors(["B", "Beta", "I", "II", "IX"])
    with pytest.raises(DuplicateRotor):
        naval.insert_rotors(["B", "Beta", "I", "I", "III"])
    with pytest.raises(MisplacedRotor):
        naval.insert_rotors(["Beta", "B", "I", "II", "III"])
    with pytest.raises(MisplacedRotor):
        naval.insert_rotors(["B", "C", "I", "II", "III"])


def test_set_rotors_errors(naval):
    naval.insert_rotors(["B", "Beta", "I", "II", "III"])
    with pytest.raises(BadSettingLength):
        naval.set_rotors("AAA")
    with pytest.raises(NotInAlphabet):
        naval.set_rotors("AA?A")


def test_convert_needs_rotors(naval):
    with pytest.raises(WrongSlotCount):
        naval.convert("A")


@pytest.mark.parametrize("slots, pawls", [(1, 1), (3, 0), (3, 4)])
def test_invalid_counts(abcde, slots, pawls):
    with pytest.raises(InvalidMachine):
        Machine(abcde, slots, pawls, [])


def test_duplicate_catalog_names(abcde, small_catalog):
    with pytest.raises(DuplicateRotor):
        Machine(abcde, 3, 1, small_catalog + small_catalog[:1])


def test_failed_set_rotors_leaves_settings_alone(naval):
    naval.insert_rotors(["B", "Beta", "I", "II", "III"])
    naval.set_rotors("AAAA")
    with pytest.raises(NotInAlphabet):
        naval.set_rotors("ZZ?Z")
    assert naval.settings() == "AAAA"
    with pytest.raises(OutOfRange):
        naval.set_rotors([25, 25, 26, 0])
    assert naval.settings() == "AAAA"


def test_leftmost_rotor_notch_does_not_step(enigma_i):
    # no pawl sits left of rotor I, so its own notch never moves it
    enigma_i.set_rotors("QAA")
    enigma_i.convert(0)
    assert enigma_i.settings() == "QAB"
