"""Domain helper functions."""

from .transformations import (
    INTERPRETERS,
    Interpreter,
    ReadingValue,
    apply_mask,
    interpret_home_away,
    interpret_mask_12bit,
    interpret_raw,
)

__all__ = [
    "INTERPRETERS",
    "Interpreter",
    "ReadingValue",
    "apply_mask",
    "interpret_home_away",
    "interpret_mask_12bit",
    "interpret_raw",
]
