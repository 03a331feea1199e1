"""
Kernel: width selector, mask ops, name resolution.

Components:
  - kinds: Kind (UINT8/UINT16/UINT32) with size/min/max
  - ops: FILL, OR, ANDN, TEST on a single fixed-width value
  - names: case-insensitive name -> key lookup
"""

from .kinds import Kind, UINT8, UINT16, UINT32
from .ops import mask_all, mask_or, mask_andn, mask_test, set_bits
from .names import resolve_name, UNRESOLVED

__all__ = [
    # Kinds
    "Kind",
    "UINT8",
    "UINT16",
    "UINT32",

    # Ops
    "mask_all",
    "mask_or",
    "mask_andn",
    "mask_test",
    "set_bits",

    # Names
    "resolve_name",
    "UNRESOLVED",

    # Receipts
    "kernel_receipts",
]


def kernel_receipts(section_label: str, fixtures: list[dict]) -> dict:
    """
    Replay fixture scenarios on fresh BitValues and record the results.

    Args:
        section_label: ASCII identifier (e.g., "kernel-smoke").
        fixtures: List of dicts with keys:
            - "kind": Kind, ordinal or name
            - "shift": list of operands
            - "unshift": list of operands (optional)
            - "names": {int: str} mapping (optional)
            - "label": str

    Returns:
        dict: Receipt digest.
    """
    from ..core import Receipts
    from ..bitvalue import new

    receipts = Receipts(section_label)

    # 1. kind bounds
    receipts.put("kind_bounds", [
        {"kind": str(k), "size": k.size, "min": k.min, "max": k.max}
        for k in Kind
    ])

    # 2. fixture replays
    results = []
    for fix in fixtures:
        bits = new(fix["kind"])
        if fix.get("names"):
            bits.set_names_map(fix["names"])
        bits.shift(*fix["shift"])
        after_shift = bits.int()
        bits.unshift(*fix.get("unshift", []))
        results.append({
            "label": fix["label"],
            "kind": str(bits.kind()),
            "after_shift": after_shift,
            "after_unshift": bits.int(),
            "set_bits": set_bits(bits.int())
        })
    receipts.put("fixtures", results)

    # 3. extremes: all() then none() on every kind
    extremes = []
    for k in Kind:
        bits = new(k)
        filled = bits.all().int()
        cleared = bits.none().int()
        extremes.append({
            "kind": str(k),
            "all_ok": filled == k.max,
            "none_ok": cleared == 0
        })
    receipts.put("extremes_ok", all(e["all_ok"] and e["none_ok"] for e in extremes))
    receipts.put("extremes", extremes)

    # 4. single-bit round trips: shift then unshift restores zero
    roundtrip_ok = True
    for k in Kind:
        for pos in range(k.size):
            bits = new(k)
            bits.shift(1 << pos)
            hit = bits.positive(1 << pos)
            bits.unshift(1 << pos)
            if not hit or bits.int() != 0:
                roundtrip_ok = False
    receipts.put("roundtrip_ok", roundtrip_ok)

    return receipts.digest()
