"""
Core foundation: parameter registry and receipts.
"""

from .registry import param_registry, RegistryError
from .receipts import Receipts, ReceiptError

__all__ = [
    # Registry
    "param_registry",
    "RegistryError",

    # Receipts
    "Receipts",
    "ReceiptError",
]
