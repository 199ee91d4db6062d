"""Shared pytest fixtures for fincontrol tests."""

import os
import tempfile
from datetime import date

import pytest

from fincontrol.database.factories import create_sqlite_database
from fincontrol.database.memory import InMemoryDatabase
from fincontrol.domain.category import CategoryService
from fincontrol.domain.cost_center import CostCenterService
from fincontrol.domain.party import ClientService, SupplierService
from fincontrol.domain.payable import PayableService
from fincontrol.domain.receivable import ReceivableService

TODAY = date(2024, 6, 10)


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_db():
    """Create an in-memory database."""
    db = InMemoryDatabase()
    db.connect()
    db.initialize_schema()
    yield db
    db.disconnect()


@pytest.fixture(params=["sqlite", "memory"])
def any_db(request):
    """Run a test against both storage backends."""
    return request.getfixturevalue("temp_db" if request.param == "sqlite" else "memory_db")


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def client_service(any_db):
    return ClientService(any_db)


@pytest.fixture
def supplier_service(any_db):
    return SupplierService(any_db)


@pytest.fixture
def category_service(any_db):
    return CategoryService(any_db)


@pytest.fixture
def cost_center_service(any_db):
    return CostCenterService(any_db)


@pytest.fixture
def payable_service(any_db):
    return PayableService(any_db)


@pytest.fixture
def receivable_service(any_db):
    return ReceivableService(any_db)


@pytest.fixture
def dre_categories(category_service):
    """One category per DRE line, returned by line name."""
    return {
        "revenue": category_service.create_category("Vendas", "income", "revenue"),
        "deductions": category_service.create_category("Impostos", "income", "deductions"),
        "costs": category_service.create_category("CMV", "expense", "costs"),
        "operational_expenses": category_service.create_category(
            "Aluguel", "expense", "operational_expenses"
        ),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
