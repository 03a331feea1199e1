"""
Kernel Verification: kinds, mask ops, name resolution, kernel_receipts().
"""

import enum
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from shifty.kernel import (
    Kind,
    UINT8,
    UINT16,
    UINT32,
    mask_all,
    mask_or,
    mask_andn,
    mask_test,
    set_bits,
    resolve_name,
    UNRESOLVED,
    kernel_receipts,
)


# ═══════════════════════════════════════════════════════════════════════
# Test 1: Kind
# ═══════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("kind, size, maximum", [
    (UINT8, 8, 255),
    (UINT16, 16, 65535),
    (UINT32, 32, 4294967295),
])
def test_kind_bounds(kind, size, maximum):
    assert kind.size == size
    assert kind.min == 0
    assert kind.max == maximum


def test_kind_ordinals_and_names():
    assert [int(k) for k in Kind] == [1, 2, 3]
    assert str(UINT32) == "uint32"
    assert f"{UINT8}" == "uint8"


def test_kind_parse():
    assert Kind.parse("uint16") is UINT16
    assert Kind.parse(" UINT8 ") is UINT8
    assert Kind.parse(3) is UINT32
    assert Kind.parse(UINT8) is UINT8
    for k in Kind:
        assert Kind.parse(str(k)) is k


@pytest.mark.parametrize("bad", ["uint64", 0, 4, True, 8.0, None])
def test_kind_parse_rejects(bad):
    with pytest.raises(ValueError):
        Kind.parse(bad)


# ═══════════════════════════════════════════════════════════════════════
# Test 2: Mask ops
# ═══════════════════════════════════════════════════════════════════════

def test_mask_all():
    assert mask_all(0) == 0
    assert mask_all(8) == 0xFF
    assert mask_all(32) == 0xFFFFFFFF
    with pytest.raises(ValueError):
        mask_all(-1)


def test_mask_or_idempotent():
    v = mask_or(0, 2, 8)
    v = mask_or(v, 4, 8)
    assert v == 6
    assert mask_or(v, 2, 8) == 6


def test_mask_andn_leaves_unset_bits():
    assert mask_andn(38, 32, 8) == 6
    assert mask_andn(6, 32, 8) == 6
    assert mask_andn(6, 0b1010, 8) == 4


def test_mask_test_any_bit():
    assert mask_test(38, 32, 8)
    assert mask_test(38, 0b11, 8), "one shared bit is enough"
    assert not mask_test(38, 1, 8)


@pytest.mark.parametrize("op", [mask_or, mask_andn, mask_test])
def test_mask_ops_reject_out_of_width(op):
    with pytest.raises(ValueError, match="outside"):
        op(0, 256, 8)
    with pytest.raises(ValueError, match="outside"):
        op(1 << 16, 1, 16)
    with pytest.raises(ValueError, match="non-negative"):
        op(0, -1, 8)


def test_set_bits():
    assert set_bits(0) == []
    assert set_bits(38) == [1, 2, 5]
    assert set_bits(0xFFFF) == list(range(16))


# ═══════════════════════════════════════════════════════════════════════
# Test 3: Name resolution
# ═══════════════════════════════════════════════════════════════════════

def test_resolve_name_case_insensitive():
    names = {1: "Read", 2: "Write"}
    assert resolve_name(names, "read") == 1
    assert resolve_name(names, "WRITE") == 2


def test_resolve_name_simple_folding_only():
    """Lowercasing, not full Unicode folding: "ß" does not expand to "ss"."""
    names = {4: "Straße"}
    assert resolve_name(names, "STRASSE") == UNRESOLVED
    assert resolve_name(names, "strasse") == UNRESOLVED
    assert resolve_name(names, "STRAßE") == 4


def test_resolve_name_last_duplicate_wins():
    names = {1: "Exec", 8: "exec", 4: "Other"}
    assert resolve_name(names, "EXEC") == 8


def test_resolve_name_unmatched():
    assert resolve_name({1: "Read"}, "delete") == UNRESOLVED
    assert resolve_name({}, "read") == UNRESOLVED
    assert resolve_name(None, "read") == UNRESOLVED
    assert UNRESOLVED == -1


def test_resolve_name_keys_not_validated():
    """Keys need not be single bits."""
    class Perm(enum.IntFlag):
        READ = 1
        WRITE = 2

    names = {Perm.READ | Perm.WRITE: "ReadWrite", 5: "Odd"}
    assert resolve_name(names, "readwrite") == 3
    assert resolve_name(names, "odd") == 5


# ═══════════════════════════════════════════════════════════════════════
# Test 4: kernel_receipts()
# ═══════════════════════════════════════════════════════════════════════

FIXTURES = [
    {"kind": "uint8", "shift": [2, 4, 32], "unshift": [32], "label": "u8-basic"},
    {"kind": UINT16, "shift": [1, 8, 65535], "unshift": [8], "label": "u16-fill"},
    {"kind": 3, "shift": ["read", "exec"], "names": {1: "Read", 4: "Exec"},
     "label": "u32-names"},
    {"kind": "uint8", "shift": [-1, 256, 0, "nope"], "label": "u8-invalid"},
]


def test_kernel_receipts_results():
    digest = kernel_receipts("kernel-fixtures", FIXTURES)
    payload = digest["payload"]

    by_label = {r["label"]: r for r in payload["fixtures"]}
    assert by_label["u8-basic"]["after_shift"] == 38
    assert by_label["u8-basic"]["after_unshift"] == 6
    assert by_label["u16-fill"]["after_shift"] == 65535
    assert by_label["u16-fill"]["after_unshift"] == 65535 & ~8
    assert by_label["u32-names"]["after_shift"] == 5
    assert by_label["u32-names"]["set_bits"] == [0, 2]
    assert by_label["u8-invalid"]["after_unshift"] == 0

    assert payload["extremes_ok"], payload["extremes"]
    assert payload["roundtrip_ok"]
    assert [b["max"] for b in payload["kind_bounds"]] == [255, 65535, 4294967295]


def test_kernel_receipts_double_run(double_run):
    double_run(lambda: kernel_receipts("kernel-double-run", FIXTURES))
