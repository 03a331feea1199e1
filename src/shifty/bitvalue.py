"""
BitValue: fixed-width unsigned flag container.

A BitValue holds one unsigned integer of a chosen Kind (8, 16 or 32 bits)
and lets callers set, clear and query bits by value or by registered name.

Extremes are special:
  - shifting in max() overwrites the value with all ones
  - unshifting max() overwrites the value with zero
  - 0 is a no-op for both

Invalid operands (out of range, unknown names, non-integers) are skipped
unless the container was built with strict=True, in which case they raise
ShiftValueError.

Example:
    >>> bits = new(UINT8)
    >>> bits.shift(2, 4, 32).int()
    38
    >>> bits.unshift(32).int()
    6
"""

import operator
from typing import Any, Iterator, Mapping

from .core import Receipts
from .kernel.kinds import Kind, UINT8, UINT16, UINT32
from .kernel.names import resolve_name
from .kernel.ops import mask_all, mask_or, mask_andn, mask_test


class ShiftValueError(ValueError):
    """Raised in strict mode when an operand does not resolve to a value in range."""

    def __init__(self, operand: Any, kind: Kind | None):
        self.operand = operand
        self.kind = kind
        super().__init__(
            f"Invalid shift value {operand!r} for kind {kind}"
        )


class BitValue:
    """
    One unsigned integer of a fixed Kind with validated bit-level mutation.

    Not safe for unsynchronized use from several threads.
    """

    __hash__ = None  # mutable

    def __init__(self, kind: Kind | int | str | None = None, *, strict: bool = False):
        """
        Args:
            kind: Width selector, its ordinal or its name. None builds the
                zero container, which holds 0 and ignores every mutation.
            strict: Raise ShiftValueError on invalid operands instead of
                skipping them.

        Raises:
            ValueError: If kind names no known width.
        """
        self._kind = None if kind is None else Kind.parse(kind)
        self._value = 0
        self._names: dict[int, str] | None = None
        self.strict = strict

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def kind(self) -> Kind | None:
        return self._kind

    def size(self) -> int:
        """Bit width: 8, 16, 32, or 0 for the zero container."""
        return self._kind.size if self._kind is not None else 0

    def min(self) -> int:
        return 0

    def max(self) -> int:
        return mask_all(self.size())

    def value(self) -> int:
        """Raw storage; the same integer int() returns."""
        return self._value

    # ------------------------------------------------------------------
    # Names
    # ------------------------------------------------------------------

    def set_names_map(self, mapping: Mapping[int, str] | None) -> "BitValue":
        """Replace the name mapping used to resolve string operands."""
        self._names = dict(mapping) if mapping is not None else None
        return self

    def names_map(self) -> dict[int, str] | None:
        return self._names

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def verify_shift_value(self, x: Any) -> int | None:
        """
        Resolve x to a plain int within [min(), max()].

        Strings are looked up in the name mapping; anything implementing
        __index__ (int, IntFlag, numpy integers) is converted. bool is
        refused.

        Returns:
            int | None: The operand, or None if x is not usable.
        """
        if isinstance(x, str):
            x = resolve_name(self._names, x)
        if isinstance(x, bool):
            return None
        try:
            X = operator.index(x)
        except TypeError:
            return None

        if self.min() <= X <= self.max():
            return X
        return None

    def _operands(self, values: tuple) -> Iterator[int]:
        for x in values:
            X = self.verify_shift_value(x)
            if X is None:
                if self.strict:
                    raise ShiftValueError(x, self._kind)
                continue
            yield X

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def shift(self, *x: Any) -> "BitValue":
        """
        Set the bits of each operand.

        max() overwrites the whole value with ones; 0 does nothing.

        Returns:
            BitValue: self, for chaining.
        """
        for X in self._operands(x):
            if X == self.max():
                self._value = self.max()
            elif X == self.min():
                continue
            else:
                self._value = mask_or(self._value, X, self.size())
        return self

    def unshift(self, *x: Any) -> "BitValue":
        """
        Clear the bits of each operand.

        max() overwrites the whole value with zero; 0 does nothing.

        Returns:
            BitValue: self, for chaining.
        """
        for X in self._operands(x):
            if X == self.max():
                self._value = self.min()
            elif X == self.min():
                continue
            else:
                self._value = mask_andn(self._value, X, self.size())
        return self

    def all(self) -> "BitValue":
        """Set every bit."""
        return self.shift(self.max())

    def none(self) -> "BitValue":
        """Clear every bit."""
        return self.unshift(self.max())

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def positive(self, x: Any) -> bool:
        """True iff any bit of x is currently set. Invalid x gives False."""
        X = self.verify_shift_value(x)
        if X is None:
            if self.strict:
                raise ShiftValueError(x, self._kind)
            return False
        if X == self.min():
            return False
        return mask_test(self._value, X, self.size())

    # ------------------------------------------------------------------
    # Receipts
    # ------------------------------------------------------------------

    def receipt(self, section: str) -> Receipts:
        """Record kind, bounds, the bit pattern and the names map."""
        receipts = Receipts(section)
        receipts.put("kind", str(self._kind) if self._kind is not None else None)
        receipts.put("min", self.min())
        receipts.put("max", self.max())
        receipts.put_bits("value", self._value, self.size())
        receipts.put_names("names_map", self._names)
        return receipts

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def copy(self) -> "BitValue":
        other = type(self)(self._kind, strict=self.strict)
        other._value = self._value
        other._names = dict(self._names) if self._names is not None else None
        return other

    def __eq__(self, other):
        if not isinstance(other, BitValue):
            return NotImplemented
        return self._kind == other._kind and self._value == other._value

    def __repr__(self):
        return f"BitValue({self._kind}, {self._value})"

    def __int__(self):
        return self._value

    def int(self):
        """Current value as a plain non-negative int."""
        return self._value


def new(kind: Kind | int | str, *, strict: bool = False) -> BitValue:
    """
    Build a BitValue of the given kind holding 0.

    Example:
        >>> new("uint16").max()
        65535
    """
    return BitValue(kind, strict=strict)


__all__ = [
    "BitValue",
    "ShiftValueError",
    "new",
    "Kind",
    "UINT8",
    "UINT16",
    "UINT32",
]
