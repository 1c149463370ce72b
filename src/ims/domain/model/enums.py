"""Enumerated domain constants.

The integer values are persisted and must never be renumbered without a
data migration.
"""

from __future__ import annotations

import re
from enum import Enum, IntEnum


class _LabelledEnum(IntEnum):

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``AROMA_BOTTLE`` -> ``AromaBottle``."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    @classmethod
    def parse(cls, raw: str | int):
        """Resolve a member from its value, name or label (case-insensitive)."""
        if isinstance(raw, int) or str(raw).isdigit():
            return cls(int(raw))
        key = re.sub(r"[^a-z0-9]", "", str(raw).lower())
        for member in cls:
            if key in (member.name.replace("_", "").lower(), member.label.lower()):
                return member
        raise ValueError(f"'{raw}' is not a valid {cls.__name__}")


class ProductType(_LabelledEnum):
    AROMA_BOMBEL = 1
    AROMA_BOTTLE = 2
    AROMA_DEVICE = 3
    SANITIZING_DEVICE = 4
    BATTERY = 5


class TasteType(_LabelledEnum):
    FLOWER = 1
    SWEET = 2
    FRESH = 3
    FRUIT = 4


class ColorType(_LabelledEnum):
    RED = 1
    BLUE = 2
    GREEN = 3
    YELLOW = 4
    ORANGE = 5
    PURPLE = 6
    PINK = 7
    BROWN = 8
    BLACK = 9
    WHITE = 10
    GRAY = 11


class DevicePlugType(_LabelledEnum):
    WITH_PLUG = 1
    WITHOUT_PLUG = 2


class BatterySize(_LabelledEnum):
    LR6 = 1
    LR9 = 2

    @property
    def label(self) -> str:
        return self.name


class ProductStatus(Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class StockChangeType(Enum):
    ADDED = "Added"
    REMOVED = "Removed"
