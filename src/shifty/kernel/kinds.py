"""
Kernel Component: Width Selector (Kind)

The three unsigned widths a BitValue can hold. Ordinals follow the
registry's kind_order, starting at 1; 0 is left for "no kind".
"""

import enum

from ..core.registry import param_registry


_REGISTRY = param_registry()
_WIDTHS = _REGISTRY["kind_widths"]


class Kind(enum.IntEnum):
    """Unsigned width selector: UINT8, UINT16 or UINT32."""

    UINT8 = 1
    UINT16 = 2
    UINT32 = 3

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    @property
    def size(self) -> int:
        """Width in bits (8, 16 or 32)."""
        return _WIDTHS[str(self)]

    @property
    def min(self) -> int:
        return _REGISTRY["min_value"]

    @property
    def max(self) -> int:
        """Largest representable value, 2**size - 1."""
        return (1 << self.size) - 1

    @classmethod
    def parse(cls, kind) -> "Kind":
        """
        Coerce a Kind, its ordinal, or its name ("uint16", "UINT16") to a Kind.

        Raises:
            ValueError: If kind names no known width.
        """
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            name = kind.strip().lower()
            if name in _WIDTHS:
                return cls[name.upper()]
            raise ValueError(
                f"Unknown kind: '{kind}'. Must be one of {_REGISTRY['kind_order']}"
            )
        if isinstance(kind, int) and not isinstance(kind, bool):
            try:
                return cls(kind)
            except ValueError:
                raise ValueError(
                    f"Unknown kind ordinal: {kind}. Must be 1..{len(cls)}"
                ) from None
        raise ValueError(f"Cannot interpret {type(kind).__name__} as a kind")


UINT8 = Kind.UINT8
UINT16 = Kind.UINT16
UINT32 = Kind.UINT32
