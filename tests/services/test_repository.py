"""LedgerRepository: staging, fetching, and all-or-nothing saves."""

import pytest
from sqlalchemy.exc import OperationalError

from ledger_kernel.exceptions import StorageError
from ledger_kernel.models.company import Company


def test_rollback_discards_staged_inserts(repository):
    repository.insert(Company(name="Staged"))
    repository.rollback()
    assert repository.fetch(Company) == []


def test_save_and_fetch(repository):
    repository.insert(Company(name="Beta"))
    repository.insert(Company(name="Alpha"))
    repository.save()
    assert [c.name for c in repository.fetch(Company, order_by=(Company.name,))] == [
        "Alpha",
        "Beta",
    ]


def test_fetch_with_criteria(repository):
    repository.insert(Company(name="Beta"))
    repository.insert(Company(name="Alpha"))
    repository.save()
    assert [c.name for c in repository.fetch(Company, Company.name == "Beta")] == ["Beta"]


def test_get(repository):
    company = Company(name="Gamma")
    repository.insert(company)
    repository.save()
    assert repository.get(Company, company.id) is company


def test_failed_save_rolls_back_and_raises(repository, session, monkeypatch, captured_logs):
    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("disk full"))

    repository.insert(Company(name="Doomed"))
    monkeypatch.setattr(session, "commit", failing_commit)

    with pytest.raises(StorageError) as exc_info:
        repository.save()
    monkeypatch.undo()

    assert exc_info.value.operation == "save"
    assert "disk full" in exc_info.value.reason
    assert repository.fetch(Company) == []
    failures = [r for r in captured_logs() if r["message"] == "storage_save_failed"]
    assert failures[0]["error"] == "OperationalError"
    assert failures[0]["exc_type"] == "OperationalError"
