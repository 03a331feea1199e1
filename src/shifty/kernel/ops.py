"""
Kernel Component: Mask Ops (FILL, OR, ANDN, TEST)

Pure operations on a single unsigned value of a given bit width.
Values and operands are plain non-negative ints with no bits at or above
the width.
"""


# ============================================================================
# FILL
# ============================================================================

def mask_all(width: int) -> int:
    """
    All-ones mask of the given width.

    Args:
        width: Bit width (>= 0).

    Returns:
        int: 2**width - 1 (0 for width 0).

    Raises:
        ValueError: If width is negative.
    """
    if width < 0:
        raise ValueError(f"Width must be non-negative, got {width}")
    return (1 << width) - 1


# ============================================================================
# BITWISE (OR/ANDN/TEST)
# ============================================================================

def _check(name: str, x: int, width: int) -> None:
    if x < 0:
        raise ValueError(f"{name} must be non-negative, got {x}")
    if (x >> width) != 0:
        raise ValueError(f"{name} has bits outside [0..{width-1}]: {x:b}")


def mask_or(value: int, operand: int, width: int) -> int:
    """
    Bitwise OR: value | operand.

    Idempotent: OR-ing bits that are already set returns value unchanged.

    Raises:
        ValueError: If value or operand is negative or wider than width.
    """
    _check("value", value, width)
    _check("operand", operand, width)
    return value | operand


def mask_andn(value: int, operand: int, width: int) -> int:
    """
    Bitwise AND-NOT: value & ~operand.

    Bits of operand that are not set in value leave value unaffected.

    Raises:
        ValueError: If value or operand is negative or wider than width.
    """
    _check("value", value, width)
    _check("operand", operand, width)
    return value & ~operand & mask_all(width)


def mask_test(value: int, operand: int, width: int) -> bool:
    """
    True iff value and operand share at least one set bit.

    Raises:
        ValueError: If value or operand is negative or wider than width.
    """
    _check("value", value, width)
    _check("operand", operand, width)
    return (value & operand) != 0


def set_bits(value: int) -> list[int]:
    """
    Positions of the set bits of value, ascending.

    Example:
        >>> set_bits(38)
        [1, 2, 5]
    """
    positions = []
    pos = 0
    while value:
        if value & 1:
            positions.append(pos)
        value >>= 1
        pos += 1
    return positions
