"""
splitledger - Shared Expense Ledger

An interactive ledger for splitting shared costs. Participants share
the cost of tasks; whoever paid for a task is credited for it; direct
payments between participants settle debts. At any point the ledger
reports what each participant owes or is owed.

DESIGN PRINCIPLES:
1. Participants and tasks refer to each other by name only
2. A rejected command changes nothing; bulk commands keep the items that worked
3. Balances are derived on demand, never persisted
4. Bad input is reported, never fatal
"""

__version__ = "1.0.0"
__author__ = "splitledger Team"
