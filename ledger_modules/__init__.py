"""
Ledger Modules.

Thin layers over the Ledger Kernel.

Modules:
- Reporting: Balance sheet, profit & loss, trial balance, journal listing;
  CSV and PDF export
"""
