"""
Ledger Kernel

A double-entry bookkeeping engine with:
- Multiple companies, each with its own chart of accounts
- Balanced journal entries posted all-or-nothing
- Balances derived from lines at query time (no stored balances)
- Active-company selection persisted outside the database
"""

__version__ = "0.1.0"
