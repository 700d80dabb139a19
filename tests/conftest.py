import pytest

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from machine import Machine
from rotor_and_reflector import FixedRotor, MovingRotor, Reflector
from suites import build_suite


@pytest.fixture(autouse=True)
def reset_debug():
    # component switches are shared class state
    components, enabled = Debug.components.copy(), Debug.enabled
    yield
    Debug.components.clear()
    Debug.components.update(components)
    Debug.enabled = enabled


@pytest.fixture
def abcde():
    return Alphabet("ABCDE")


@pytest.fixture
def small_catalog(abcde):
    return [
        Reflector("R", Permutation("(AB) (CDE)", abcde)),
        FixedRotor("F", Permutation("(AD) (BE)", abcde)),
        MovingRotor("M", Permutation("(ACBED)", abcde), "A"),
    ]


@pytest.fixture
def small_machine(abcde, small_catalog):
    m = Machine(abcde, 3, 1, small_catalog)
    m.insert_rotors(["R", "F", "M"])
    m.set_rotors("AA")
    return m


@pytest.fixture
def naval():
    return build_suite("naval")


@pytest.fixture
def enigma_i():
    m = build_suite("enigma-i")
    m.insert_rotors(["B", "I", "II", "III"])
    m.set_rotors("AAA")
    return m
