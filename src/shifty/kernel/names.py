"""
Kernel Component: Name Resolution

Maps a symbolic flag name to the integer key registered for it.
"""

from typing import Mapping

# Returned for names that match nothing; out of range for every kind.
UNRESOLVED = -1


def resolve_name(names: Mapping[int, str] | None, text: str) -> int:
    """
    Resolve text to its integer key in names.

    Matching lowercases both sides (no full Unicode folding, so "Straße"
    does not match "STRASSE") and scans every entry in insertion order;
    when two keys carry the same name the later key wins.

    Args:
        names: Mapping of integer key to display name, or None.
        text: Name to look up.

    Returns:
        int: The matching key, or UNRESOLVED (-1).

    Example:
        >>> resolve_name({1: "Read", 2: "Write"}, "WRITE")
        2
    """
    if not names:
        return UNRESOLVED

    wanted = text.lower()
    found = UNRESOLVED
    for key, name in names.items():
        if isinstance(name, str) and name.lower() == wanted:
            found = key
    return found
