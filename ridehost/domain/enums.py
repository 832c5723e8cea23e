"""Domain enumerations and seat-type reference data."""

import enum
from dataclasses import dataclass


class SeatType(str, enum.Enum):
    FRONT = "front"
    BACK_WINDOW = "backWindow"
    BACK_MIDDLE = "backMiddle"
    BACK_ARMREST = "backArmrest"
    THIRD_ROW = "thirdRow"
    ANY = "any"


@dataclass(frozen=True)
class SeatTypeDefinition:
    type: SeatType
    label: str
    icon: str


# Declaration order is the display order and the payload order.
SEAT_TYPES: tuple[SeatTypeDefinition, ...] = (
    SeatTypeDefinition(SeatType.FRONT, "Front Seat", "car-outline"),
    SeatTypeDefinition(SeatType.BACK_WINDOW, "Back Window Seat", "car-sport-outline"),
    SeatTypeDefinition(SeatType.BACK_MIDDLE, "Back Middle Seat", "people-outline"),
    SeatTypeDefinition(SeatType.BACK_ARMREST, "Back Seat w/ Armrest", "accessibility-outline"),
    SeatTypeDefinition(SeatType.THIRD_ROW, "Third Row Seat", "bus-outline"),
    SeatTypeDefinition(SeatType.ANY, "Any Seat (No Preference)", "grid-outline"),
)

# Buckets are emptied in this order when the total shrinks, so named
# seat types survive longest.
SEAT_TRIM_ORDER: tuple[SeatType, ...] = (
    SeatType.ANY,
    SeatType.THIRD_ROW,
    SeatType.BACK_ARMREST,
    SeatType.BACK_MIDDLE,
    SeatType.BACK_WINDOW,
    SeatType.FRONT,
)
