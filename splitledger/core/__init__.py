"""
Ledger core package.

EntityStore, BalanceCalculator and SnapshotCodec. The command layer
lives in splitledger.core.operations.
"""

from splitledger.core.balance import BalanceCalculator
from splitledger.core.store import EntityStore
from splitledger.core.codec import SnapshotCodec

__all__ = ["BalanceCalculator", "EntityStore", "SnapshotCodec"]
