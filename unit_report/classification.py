"""Floor/line → bedroom/bathroom classification.

The building's unit mix is fixed by floor band. Within a band each line
(the letter suffix of a unit) has one layout:

| Floors | Lines → beds/baths |
|--------|--------------------|
| 15-16  | A,E,F,L → 2/2; B,C,D → 1/1; G → 0/1 |
| 17-38  | A,E,F,L → 2/2; B,C,D,H,J,K → 1/1; G → 0/1 |
| 41-68  | A,B,C,H → 2/2; G,J,F → 1/1; E → 3/2; D → 3/3 |

Floors 39-40 are mechanical and have no residential units.
"""

from typing import NamedTuple


class UnitType(NamedTuple):
    beds: str
    baths: str


# Ranges are inclusive. First matching band wins, then first matching line set.
UNIT_TYPE_TABLE: tuple[tuple[int, int, tuple[tuple[str, UnitType], ...]], ...] = (
    (15, 16, (
        ("AEFL", UnitType("2", "2")),
        ("BCD", UnitType("1", "1")),
        ("G", UnitType("0", "1")),
    )),
    (17, 38, (
        ("AEFL", UnitType("2", "2")),
        ("BCDHJK", UnitType("1", "1")),
        ("G", UnitType("0", "1")),
    )),
    (41, 68, (
        ("ABCH", UnitType("2", "2")),
        ("GJF", UnitType("1", "1")),
        ("E", UnitType("3", "2")),
        ("D", UnitType("3", "3")),
    )),
)


def parse_floor(floor: int | str | None) -> int | None:
    """Return the floor as an int, or None if it isn't numeric."""
    if floor is None:
        return None
    if isinstance(floor, int):
        return floor
    floor = floor.strip()
    # isdigit() alone accepts superscripts that int() rejects
    return int(floor) if floor.isascii() and floor.isdigit() else None


def classify_unit(floor: int | str | None, line: str | None) -> UnitType | None:
    """Look up the (beds, baths) layout for a floor and line.

    Returns None when the floor is outside every band or the line isn't
    listed for that band.
    """
    floor_number = parse_floor(floor)
    if floor_number is None or not line or len(line) != 1:
        return None

    for low, high, line_sets in UNIT_TYPE_TABLE:
        if low <= floor_number <= high:
            for lines, unit_type in line_sets:
                if line in lines:
                    return unit_type
            return None
    return None
