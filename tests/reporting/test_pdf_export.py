"""PDF serialization: valid documents, pagination, deterministic output."""

from datetime import date

from ledger_kernel.models.account import AccountType

from ledger_modules.reporting.export import ExportFormat, build_pdf, generate, render_pdf
from ledger_modules.reporting.models import ReportType
from ledger_modules.reporting.statements import build_trial_balance

from tests.reporting.conftest import make_balance, make_metadata


def _trial_balance(n_accounts: int):
    balances = [
        make_balance(f"Account {i:03d}", AccountType.ASSET, "10", sort_order=i)
        for i in range(n_accounts)
    ]
    return build_trial_balance(
        balances, make_metadata(ReportType.TRIAL_BALANCE, as_of_date=date(2024, 1, 31))
    )


def test_renders_pdf_bytes(company, books, reporting_service):
    report = reporting_service.balance_sheet(company.id, date(2024, 1, 31))
    data = render_pdf(report)
    assert data.startswith(b"%PDF")
    assert data.rstrip().endswith(b"%%EOF")


def test_generate_pdf(company, books, reporting_service):
    report = reporting_service.profit_and_loss(company.id, date(2024, 1, 1), date(2024, 1, 31))
    assert generate(report, ExportFormat.PDF).startswith(b"%PDF")


def test_short_report_fits_one_page():
    assert build_pdf(_trial_balance(5)).pages_count == 1


def test_long_report_paginates():
    assert build_pdf(_trial_balance(120)).pages_count >= 3


def test_output_is_deterministic():
    report = _trial_balance(10)
    assert render_pdf(report) == render_pdf(report)


def test_non_latin_text_does_not_fail():
    balances = [make_balance("Café ✓ 東京", AccountType.ASSET, "1")]
    report = build_trial_balance(
        balances, make_metadata(ReportType.TRIAL_BALANCE, as_of_date=date(2024, 1, 31))
    )
    assert render_pdf(report).startswith(b"%PDF")
