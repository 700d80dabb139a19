# suites.py
from typing import Dict

from errors import ConfigError
from machine import Machine
from utilities import read_config

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Kriegsmarine M4: eight wheels, two thin fixed wheels, two thin reflectors
NAVAL = f"""{Alpha26}
 5 3
 I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
 II ME     (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
 III MV    (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
 IV MJ     (AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)
 V MZ      (AVOLDRWFIUQ)(BZKSMNHYC) (EGTJPX)
 VI MZM    (AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)
 VII MZM   (ANOUPFRIMBZTLWKSVEGCJYDHXQ)
 VIII MZM  (AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)
 Beta N    (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
 Gamma N   (AFNIRLBSQWVXGUZDKMTPCOYJHE)
 B R       (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP)
           (RX) (SZ) (TV)
 C R       (AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW)
           (QZ) (SX) (UY)
"""

# Enigma I: three of five wheels in front of a wide reflector
ENIGMA_I = f"""{Alpha26}
 4 3
 I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
 II ME     (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
 III MV    (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
 IV MJ     (AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)
 V MZ      (AVOLDRWFIUQ)(BZKSMNHYC) (EGTJPX)
 A R       (AE) (BJ) (CM) (DZ) (FL) (GY) (HX) (IV) (KW) (NR)
           (OQ) (PU) (ST)
 B R       (AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN)
           (MO) (TZ) (VW)
 C R       (AF) (BV) (CP) (DJ) (EI) (GO) (HY) (KR) (LZ) (MX)
           (NW) (QT) (SU)
"""

SUITES: Dict[str, str] = {
    "naval":   NAVAL,
    "enigma-i": ENIGMA_I,
}


def build_suite(name: str) -> Machine:
    """Return a fresh Machine for the built-in suite NAME."""
    try:
        text = SUITES[name.lower()]
    except KeyError:
        raise ConfigError(f"Unknown suite '{name}'. Expected one of {list(SUITES)}")
    return read_config(text)
