# debug.py
from __future__ import annotations
import logging
from typing import ClassVar, Dict


class Debug:
    _root_configured: bool = False          # class-level guard

    # component map is shared, so a toggle in main.py reaches machine.py
    components: ClassVar[Dict[str, bool]] = {
        "config":     False,
        "plugboard":  False,
        "rotor":      False,
        "stepping":   False,
        "encipher":   False,
    }
    enabled: ClassVar[bool] = True          # global switch

    def __init__(self) -> None:
        """Multiple Debug() instances share the same root logger config
        and the same component switches."""
        if not Debug._root_configured:
            logging.basicConfig(
                level=logging.DEBUG,
                format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                handlers=[logging.StreamHandler()],
            )
            Debug._root_configured = True

        self.logger = logging.getLogger("ENIGMA")

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if Debug.enabled and Debug.components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug.components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug.components[c] = False

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        Debug.enabled = state

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in Debug.components:
            raise ValueError(f"No such component: {component!r}")
