"""Feature modules for TON Quick Transfer.

- transfer: transfer preparation, balance guard, TUI screens and handlers
- monitoring: submission and confirmation tracking
"""

from ton_quick_transfer.features import monitoring
from ton_quick_transfer.features import transfer

__all__ = ["monitoring", "transfer"]
