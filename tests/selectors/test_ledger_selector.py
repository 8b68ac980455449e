"""LedgerSelector: account listings and derived balances."""

from datetime import date
from decimal import Decimal

from ledger_kernel.domain.balance import DateFilter
from ledger_kernel.models.account import AccountType


class TestAccountListings:
    def test_accounts_by_type_in_sort_order(self, company, ledger_selector):
        assets = ledger_selector.accounts_by_type(company.id, AccountType.ASSET)
        assert [a.name for a in assets] == [
            "Cash", "Checking", "Savings", "Accounts Receivable", "Equipment",
        ]

    def test_ties_broken_by_name(self, company, account_service, ledger_selector):
        account_service.create_account(company.id, "Zeta", AccountType.ASSET, sort_order=1)
        assets = ledger_selector.accounts_by_type(company.id, AccountType.ASSET)
        assert [a.name for a in assets][:2] == ["Cash", "Zeta"]

    def test_all_accounts_grouped_by_type(self, company, ledger_selector):
        accounts = ledger_selector.accounts(company.id)
        assert len(accounts) == 22
        types = [a.account_type for a in accounts]
        assert types == sorted(types, key=list(AccountType).index)

    def test_accounts_scoped_to_company(self, company, company_service, ledger_selector):
        other = company_service.create_company("Other Co")
        mine = {a.account_id for a in ledger_selector.accounts(company.id)}
        theirs = {a.account_id for a in ledger_selector.accounts(other.id)}
        assert mine.isdisjoint(theirs)


class TestBalances:
    def test_fresh_account_is_zero(self, accounts, ledger_selector):
        assert ledger_selector.balance_of(accounts["Cash"]) == Decimal("0")

    def test_sale_moves_both_sides_positive(self, post, accounts, ledger_selector):
        post(date(2024, 1, 5), "Sale", ("Cash", "250.00", True), ("Sales Income", "250.00", False))
        assert ledger_selector.balance_of(accounts["Cash"]) == Decimal("250.00")
        assert ledger_selector.balance_of(accounts["Sales Income"]) == Decimal("250.00")

    def test_overdrawn_asset_is_negative(self, post, accounts, ledger_selector):
        post(date(2024, 1, 5), "Pay card", ("Credit Cards Payable", "40", True), ("Cash", "40", False))
        assert ledger_selector.balance_of(accounts["Cash"]) == Decimal("-40")
        assert ledger_selector.balance_of(accounts["Credit Cards Payable"]) == Decimal("-40")

    def test_as_of_filter(self, post, accounts, ledger_selector):
        post(date(2024, 1, 5), "Early", ("Cash", "10", True), ("Sales Income", "10", False))
        post(date(2024, 2, 5), "Late", ("Cash", "20", True), ("Sales Income", "20", False))
        cash = accounts["Cash"]
        assert ledger_selector.balance_of(cash, DateFilter.as_of(date(2024, 1, 31))) == Decimal("10")
        assert ledger_selector.balance_of(cash, DateFilter.as_of(date(2024, 2, 5))) == Decimal("30")

    def test_range_filter(self, post, accounts, ledger_selector):
        post(date(2024, 1, 5), "Early", ("Cash", "10", True), ("Sales Income", "10", False))
        post(date(2024, 2, 5), "Late", ("Cash", "20", True), ("Sales Income", "20", False))
        window = DateFilter.between(date(2024, 2, 1), date(2024, 2, 29))
        assert ledger_selector.balance_of(accounts["Sales Income"], window) == Decimal("20")

    def test_account_balances_cover_every_account(self, post, company, ledger_selector):
        post(date(2024, 1, 5), "Sale", ("Cash", "5", True), ("Sales Income", "5", False))
        balances = ledger_selector.account_balances(company.id)
        assert len(balances) == 22
        by_name = {b.name: b.balance for b in balances}
        assert by_name["Cash"] == Decimal("5")
        assert by_name["Checking"] == Decimal("0")

    def test_account_balances_of_one_type(self, post, company, ledger_selector):
        post(date(2024, 1, 5), "Rent", ("Insurance", "12", True), ("Cash", "12", False))
        expenses = ledger_selector.account_balances(company.id, AccountType.EXPENSE)
        assert len(expenses) == 9
        assert {b.account.account_type for b in expenses} == {AccountType.EXPENSE}

    def test_total_for_type_and_net_income(self, post, company, ledger_selector):
        post(date(2024, 1, 5), "Sale", ("Cash", "500", True), ("Sales Income", "500", False))
        post(date(2024, 1, 6), "Ads", ("Advertising Income", "0.01", False), ("Cash", "0.01", True))
        post(date(2024, 1, 7), "Lunch", ("Meals", "30", True), ("Cash", "30", False))
        post(date(2024, 1, 8), "Tools", ("Materials", "70", True), ("Cash", "70", False))

        assert ledger_selector.total_for_type(company.id, AccountType.REVENUE) == Decimal("500.01")
        assert ledger_selector.total_for_type(company.id, AccountType.EXPENSE) == Decimal("100")
        assert ledger_selector.net_income(company.id) == Decimal("400.01")

    def test_net_income_respects_filter(self, post, company, ledger_selector):
        post(date(2024, 1, 5), "Sale", ("Cash", "500", True), ("Sales Income", "500", False))
        post(date(2024, 3, 5), "Lunch", ("Meals", "30", True), ("Cash", "30", False))
        january = DateFilter.between(date(2024, 1, 1), date(2024, 1, 31))
        assert ledger_selector.net_income(company.id, january) == Decimal("500")

    def test_posting_count(self, post, accounts, ledger_selector):
        post(date(2024, 1, 5), "A", ("Cash", "1", True), ("Sales Income", "1", False))
        post(date(2024, 1, 6), "B", ("Cash", "1", True), ("Sales Income", "1", False))
        assert ledger_selector.posting_count(accounts["Cash"].account_id) == 2
        assert ledger_selector.posting_count(accounts["Savings"].account_id) == 0

    def test_other_company_postings_do_not_leak(
        self, post, company, company_service, ledger_selector
    ):
        post(date(2024, 1, 5), "Sale", ("Cash", "9", True), ("Sales Income", "9", False))
        other = company_service.create_company("Other Co")
        assert ledger_selector.net_income(other.id) == Decimal("0")
