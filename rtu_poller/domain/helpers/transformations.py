"""Value transformation helper functions.

This module turns decoded register words into the values reported for
each reading. Every function here is pure and total: any sequence of
16-bit words with at least one element produces a result.
"""

from typing import Callable, Dict, Sequence, Union

from ...const import MASK_12BIT, MASK_1BIT
from ..value_objects.occupancy_state import OccupancyState

ReadingValue = Union[int, OccupancyState]
Interpreter = Callable[[Sequence[int]], ReadingValue]


def apply_mask(value: int, mask: int) -> int:
    """Keep only the bits of ``value`` selected by ``mask``.

    Examples:
        >>> apply_mask(0xFFFF, 0x0FFF)
        4095
        >>> apply_mask(0x0003, 0x01)
        1
    """
    return value & mask


def interpret_raw(words: Sequence[int]) -> int:
    """Report the first register word unchanged.

    Examples:
        >>> interpret_raw([42])
        42
    """
    return words[0]


def interpret_mask_12bit(words: Sequence[int]) -> int:
    """Report the low 12 bits of the first register word.

    The device sends a full 16-bit word but the upper four bits carry
    no meaning. No scaling is applied.

    Examples:
        >>> interpret_mask_12bit([0xFFFF])
        4095
        >>> interpret_mask_12bit([0x10FA])
        250
    """
    return apply_mask(words[0], MASK_12BIT)


def interpret_home_away(words: Sequence[int]) -> OccupancyState:
    """Map bit 0 of the first register word to home (0) or away (1).

    Examples:
        >>> interpret_home_away([0x0000])
        <OccupancyState.HOME: 'home'>
        >>> interpret_home_away([0x8001])
        <OccupancyState.AWAY: 'away'>
    """
    if apply_mask(words[0], MASK_1BIT) == 1:
        return OccupancyState.AWAY
    return OccupancyState.HOME


INTERPRETERS: Dict[str, Interpreter] = {
    "raw": interpret_raw,
    "mask_12bit": interpret_mask_12bit,
    "home_away": interpret_home_away,
}
