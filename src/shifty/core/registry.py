"""
Core Component: Parameter Registry

Frozen constants for the bit-value container.
Widths, extreme-value policy and name matching rules live here so that every
receipt can bind to them by hash.

No environment lookups, no optionals.
"""


def param_registry() -> dict:
    """
    Returns a frozen mapping of all global constants used by the library.

    Keys and values are JSON-serializable primitives, lists or dicts.
    This registry is hashed into every section receipt.

    Returns:
        dict: Parameter mapping with exact keys and values.

    Raises:
        RegistryError: If any required key is missing (internal consistency check).
    """
    registry = {
        "library_version": "0.1.0",

        # Width selectors, in ordinal order (1, 2, 3)
        "kind_order": ["uint8", "uint16", "uint32"],
        "kind_widths": {
            "uint8": 8,
            "uint16": 16,
            "uint32": 32
        },

        # Lower bound of every kind
        "min_value": 0,

        # String operands: case-insensitive, last duplicate wins
        "name_match": "lower",
        "name_duplicates": "last-wins",

        # max() overwrites instead of masking; 0 is a no-op
        "extremes_policy": "clobber",

        # positive(x) is true when any bit of x is set
        "positive_policy": "any-bit",

        "hash_algo": "BLAKE3"
    }

    required_keys = {
        "library_version", "kind_order", "kind_widths", "min_value",
        "name_match", "name_duplicates", "extremes_policy",
        "positive_policy", "hash_algo"
    }

    actual_keys = set(registry.keys())
    if actual_keys != required_keys:
        missing = required_keys - actual_keys
        extra = actual_keys - required_keys
        raise RegistryError(
            f"param_registry() key mismatch. Missing: {missing}, Extra: {extra}"
        )

    if list(registry["kind_widths"]) != registry["kind_order"]:
        raise RegistryError(
            f"kind_widths {list(registry['kind_widths'])} "
            f"out of step with kind_order {registry['kind_order']}"
        )

    return registry


class RegistryError(Exception):
    """Raised when param_registry() has missing or unexpected keys."""
    pass
