"""Item value types and the group aggregation functions they allow."""

COMMON_FUNCTIONS: tuple[str, ...] = ("EQUALITY", "COUNT")

ARITHMETIC_FUNCTIONS: tuple[str, ...] = ("AVG", "MEDIAN", "MAX", "MIN", "SUM")

# AND/OR/NAND/NOR take the two states as parameters, e.g. AND(OPEN,CLOSED).
LOGICAL_OPEN_CLOSED_FUNCTIONS: tuple[str, ...] = ("AND", "OR", "NAND", "NOR")
LOGICAL_PLAY_PAUSE_FUNCTIONS: tuple[str, ...] = ("AND", "OR", "NAND", "NOR")
LOGICAL_ON_OFF_FUNCTIONS: tuple[str, ...] = ("AND", "OR", "NAND", "NOR", "XOR")

DATETIME_FUNCTIONS: tuple[str, ...] = ("LATEST", "EARLIEST")

_SPECIFIC_FUNCTIONS: dict[str, tuple[str, ...]] = {
    "Dimmer": ARITHMETIC_FUNCTIONS,
    "Rollershutter": ARITHMETIC_FUNCTIONS,
    "Number": ARITHMETIC_FUNCTIONS,
    "Contact": LOGICAL_OPEN_CLOSED_FUNCTIONS,
    "Player": LOGICAL_PLAY_PAUSE_FUNCTIONS,
    "DateTime": DATETIME_FUNCTIONS,
    "Switch": LOGICAL_ON_OFF_FUNCTIONS,
}


def aggregation_functions(base_type: str) -> tuple[str, ...]:
    """Return the aggregation function names a group of `base_type` items may use."""
    return COMMON_FUNCTIONS + _SPECIFIC_FUNCTIONS.get(base_type, ())


def split_type(value_type: str | None) -> tuple[str, str | None]:
    """Split `Number:Temperature` into ("Number", "Temperature").

    A missing type reads as "None", which is also what an untyped group declares.
    """
    if not value_type:
        return "None", None
    base, _, dimension = value_type.partition(":")
    return base, dimension or None
