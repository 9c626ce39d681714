"""Which control keys are currently held down."""

from __future__ import annotations

from dataclasses import dataclass, fields

MOVEMENT_KEYS = ("w", "s", "a", "d")
ROTATION_KEYS = ("i", "j", "o", "k", "p", "l")
SCALING_KEYS = ("q", "e")
CONTROL_KEYS = frozenset(MOVEMENT_KEYS + ROTATION_KEYS + SCALING_KEYS)


@dataclass
class KeyState:
    """Held state of the movement, rotation and scaling keys.

    ``w``/``s`` move up and down and ``a``/``d`` left and right;
    ``i``/``j`` rotate about x, ``o``/``k`` about y and ``p``/``l`` about z;
    ``q`` grows the model and ``e`` shrinks it.
    """

    w: bool = False
    s: bool = False
    a: bool = False
    d: bool = False
    i: bool = False
    j: bool = False
    o: bool = False
    k: bool = False
    p: bool = False
    l: bool = False  # noqa: E741
    q: bool = False
    e: bool = False

    def set_key(self, name: str, pressed: bool) -> bool:
        """Record a key press or release; return False for keys that are not controls."""
        if name not in CONTROL_KEYS:
            return False
        setattr(self, name, bool(pressed))
        return True

    def release_all(self) -> None:
        """Mark every control key as released."""
        for f in fields(self):
            setattr(self, f.name, False)