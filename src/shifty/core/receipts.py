"""
Core Component: Receipts

Hashed snapshots of flag state.

A receipt is an ordered set of entries taken under one section label:
  - scalars (int, bool, str, None)
  - bit patterns of a known width, with their set positions
  - names tables, keyed by the decimal form of each integer key
  - short tables of flat records (used by kernel_receipts)

digest() seals the entries with BLAKE3, together with the hash of the
registry they were taken under.
"""

import json
import operator
from typing import Any, Mapping

import blake3

from .registry import param_registry


class Receipts:
    """Ordered, write-once record of flag state for one section."""

    def __init__(self, section: str):
        self.section = section
        self.entries: dict[str, Any] = {}

    def _claim(self, key: str) -> None:
        if key in self.entries:
            raise ReceiptError(f"Duplicate key in receipts: '{key}'")

    def put(self, key: str, value: Any) -> None:
        """
        Record a scalar, or a list of scalars / flat records.

        Raises:
            ReceiptError: If key is taken or value has an unsupported shape.
        """
        self._claim(key)
        self.entries[key] = _entry(value, key)

    def put_bits(self, key: str, value: int, width: int) -> None:
        """
        Record value as a width-bit pattern.

        Stored as {"width": w, "value": v, "set_bits": [positions...]}.

        Raises:
            ReceiptError: If value is negative or wider than width.
        """
        self._claim(key)
        value = _as_int(value, key)
        if value < 0 or value >> width:
            raise ReceiptError(
                f"Value {value} does not fit {width} bits (key: '{key}')"
            )
        self.entries[key] = {
            "width": width,
            "value": value,
            "set_bits": [pos for pos in range(width) if (value >> pos) & 1]
        }

    def put_names(self, key: str, names: Mapping[int, str] | None) -> None:
        """
        Record a names map. Keys are written as decimal strings so IntFlag
        keys hash the same on every interpreter.

        Raises:
            ReceiptError: If a key is not integer-like or a name is not a str.
        """
        self._claim(key)
        if names is None:
            self.entries[key] = None
            return

        table = {}
        for k, name in names.items():
            if not isinstance(name, str):
                raise ReceiptError(
                    f"Names must be str (key: '{key}', entry: {k!r})"
                )
            table[str(_as_int(k, f"{key}.{k!r}"))] = name
        self.entries[key] = table

    def digest(self) -> dict:
        """
        Returns the sealed receipt.

        Format:
          {
            "section": section,
            "library_version": registry["library_version"],
            "param_registry_hash": blake3 over the canonical registry,
            "payload": {key: entry, ...},
            "section_hash": blake3 over everything above
          }
        """
        registry = param_registry()
        body = {
            "section": self.section,
            "library_version": registry["library_version"],
            "param_registry_hash": _blake3_hex(_canonical(registry)),
            "payload": dict(self.entries)
        }
        return {**body, "section_hash": _blake3_hex(_canonical(body))}


def _blake3_hex(data: bytes) -> str:
    return blake3.blake3(data).hexdigest()


def _canonical(obj: Any) -> bytes:
    """Sorted keys, compact separators, raw UTF-8."""
    return json.dumps(
        obj, sort_keys=True, ensure_ascii=False, separators=(',', ':')
    ).encode('utf-8')


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise ReceiptError(f"Expected an integer, got bool (key: '{key}')")
    try:
        return operator.index(value)
    except TypeError:
        raise ReceiptError(
            f"Expected an integer, got {type(value).__name__} (key: '{key}')"
        ) from None


def _scalar(value: Any, key: str):
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return operator.index(value)
    raise ReceiptError(
        f"Invalid type in receipts: {type(value).__name__} (key: '{key}'). "
        f"Allowed: int, bool, str, None."
    )


def _entry(value: Any, key: str):
    if isinstance(value, (list, tuple)):
        return [_row(item, f"{key}[{i}]") for i, item in enumerate(value)]
    return _scalar(value, key)


def _row(item: Any, key: str):
    if not isinstance(item, dict):
        return _scalar(item, key)

    row = {}
    for name, field in item.items():
        if not isinstance(name, str):
            raise ReceiptError(
                f"Record fields must be named by str (key: '{key}', field: {name!r})"
            )
        if isinstance(field, (list, tuple)):
            row[name] = [_as_int(x, f"{key}.{name}") for x in field]
        else:
            row[name] = _scalar(field, f"{key}.{name}")
    return row


class ReceiptError(Exception):
    """Raised when a receipt gets a duplicate key or an entry it cannot record."""
    pass
