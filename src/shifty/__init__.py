"""
shifty: fixed-width unsigned bit-flag container.

Set, clear and query bits of an 8, 16 or 32 bit value, by integer or by
registered name.
"""

__version__ = "0.1.0"

from .kernel import Kind, UINT8, UINT16, UINT32
from .bitvalue import BitValue, ShiftValueError, new

__all__ = [
    "Kind",
    "UINT8",
    "UINT16",
    "UINT32",
    "BitValue",
    "ShiftValueError",
    "new",
]
