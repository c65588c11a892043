"""Domain models for rentable equipment."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

DEFAULT_CONDITION = "good"


class EquipmentCategory(str, Enum):
    """Kinds of equipment the studio rents out."""

    CAMERA = "CAMERA"
    LENS = "LENS"
    LIGHTING = "LIGHTING"
    BACKGROUND = "BACKGROUND"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Equipment:
    """Represents an equipment item and its current availability."""

    id: int
    name: str
    category: EquipmentCategory
    model: str
    rental_price: Decimal
    is_available: bool = True
    condition: str = DEFAULT_CONDITION


@dataclass(frozen=True)
class EquipmentRequest:
    """Fields collected to register an equipment item."""

    name: str
    category: EquipmentCategory
    rental_price: Decimal
    model: str = ""
    is_available: bool = True
    condition: str | None = None
