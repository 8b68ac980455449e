"""
Default chart of accounts.

A static table, not user-editable at seed time.  Every new company -- the
bootstrap default company and every company created afterwards -- starts
with these 22 accounts.
"""

from ledger_kernel.models.account import AccountType

DEFAULT_COMPANY_NAME = "My Company"

# (name, type, sort_order)
DEFAULT_CHART: tuple[tuple[str, AccountType, int], ...] = (
    # Assets
    ("Cash", AccountType.ASSET, 1),
    ("Checking", AccountType.ASSET, 2),
    ("Savings", AccountType.ASSET, 3),
    ("Accounts Receivable", AccountType.ASSET, 4),
    ("Equipment", AccountType.ASSET, 5),
    # Liabilities
    ("Credit Cards Payable", AccountType.LIABILITY, 1),
    ("Loan Payable", AccountType.LIABILITY, 2),
    ("Sales Tax Payable", AccountType.LIABILITY, 3),
    # Equity
    ("Owner's Equity", AccountType.EQUITY, 1),
    ("Retained Earnings", AccountType.EQUITY, 2),
    # Revenue
    ("Sales Income", AccountType.REVENUE, 1),
    ("Affiliate Income", AccountType.REVENUE, 2),
    ("Advertising Income", AccountType.REVENUE, 3),
    # Expenses
    ("Materials", AccountType.EXPENSE, 1),
    ("Subcontractors", AccountType.EXPENSE, 2),
    ("Advertising/Marketing", AccountType.EXPENSE, 3),
    ("Software/Subscriptions", AccountType.EXPENSE, 4),
    ("Insurance", AccountType.EXPENSE, 5),
    ("Office Supplies", AccountType.EXPENSE, 6),
    ("Travel", AccountType.EXPENSE, 7),
    ("Meals", AccountType.EXPENSE, 8),
    ("Professional Fees", AccountType.EXPENSE, 9),
)
