"""CLI tests using click's CliRunner."""

from datetime import date

import pytest

from fincontrol.cli.main import cli
from fincontrol.database.memory import InMemoryDatabase


@pytest.fixture
def db():
    return InMemoryDatabase()


@pytest.fixture
def invoke(cli_runner, db):
    """Invoke the CLI against a shared in-memory database."""

    def _invoke(*args):
        return cli_runner.invoke(cli, list(args), obj={"db": db})

    return _invoke


def test_help_does_not_touch_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "payable" in result.output
    assert "dre" in result.output


def test_client_lifecycle(invoke, db):
    result = invoke("client", "create", "Empresa Beta Ltda", "--email", "financeiro@beta.com")
    assert result.exit_code == 0
    assert "Created client 'Empresa Beta Ltda' (ID: 1)" in result.output

    result = invoke("client", "update", "1", "--phone", "(11) 8765-4321")
    assert result.exit_code == 0
    assert db.get_client(1).phone == "(11) 8765-4321"

    result = invoke("client", "list")
    assert "Empresa Beta Ltda" in result.output

    result = invoke("client", "delete", "1", "--yes")
    assert result.exit_code == 0
    assert db.list_clients() == []


def test_supplier_delete_blocked(invoke):
    invoke("supplier", "create", "Fornecedor ABC")
    invoke("payable", "add", "-d", "Compra", "-a", "10", "--due-date", "2024-06-01", "--supplier", "1")

    result = invoke("supplier", "delete", "1", "--yes")
    assert result.exit_code == 1
    assert "Cannot delete supplier 1" in result.output


def test_category_commands(invoke, db):
    result = invoke("category", "create", "Vendas", "--type", "income", "--dre", "revenue")
    assert result.exit_code == 0

    result = invoke("category", "create", "vendas", "--type", "income")
    assert result.exit_code == 1
    assert "already exists" in result.output

    result = invoke("category", "update", "1", "--dre", "none")
    assert result.exit_code == 0
    assert db.get_category(1).dre_category is None

    result = invoke("category", "list", "--type", "income")
    assert "Vendas" in result.output


def test_cost_center_commands(invoke):
    assert invoke("cost-center", "create", "TI", "--description", "Tecnologia").exit_code == 0
    result = invoke("cost-center", "list")
    assert "TI" in result.output
    assert invoke("cost-center", "delete", "1").exit_code == 0
    assert "No cost centers found." in invoke("cost-center", "list").output


def test_payable_flow(invoke, db):
    result = invoke(
        "payable", "add", "-d", "Energia", "-a", "R$ 850,00", "--due-date", "in 3 days", "--today", "2024-06-10"
    )
    assert result.exit_code == 0
    assert "due 2024-06-13" in result.output

    invoke("payable", "add", "-d", "Aluguel", "-a", "5000", "--due-date", "2024-06-05")

    result = invoke("payable", "list", "--status", "overdue", "--today", "2024-06-10")
    assert "Aluguel" in result.output
    assert "Energia" not in result.output
    assert "overdue" in result.output

    result = invoke("payable", "upcoming", "--today", "2024-06-10")
    assert "Energia" in result.output
    assert "Aluguel" in result.output

    result = invoke("payable", "pay", "2", "--date", "2024-06-09")
    assert result.exit_code == 0
    assert db.get_payable(2).payment_date == date(2024, 6, 9)

    assert invoke("payable", "delete", "1").exit_code == 0
    result = invoke("payable", "delete", "1")
    assert result.exit_code == 1
    assert "Payable 1 not found" in result.output


def test_payable_rejects_bad_amount(invoke):
    result = invoke("payable", "add", "-d", "X", "--amount=-5", "--due-date", "2024-06-01")
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_receivable_flow(invoke, db):
    invoke("client", "create", "Cliente Premium")
    result = invoke(
        "receivable", "add", "-d", "Consultoria", "-a", "8500", "--due-date", "2024-06-09", "--client", "1"
    )
    assert result.exit_code == 0

    result = invoke("receivable", "list", "--status", "pending")
    assert "Cliente Premium" in result.output

    result = invoke("receivable", "receive", "1", "--date", "2024-06-10")
    assert result.exit_code == 0
    assert db.get_receivable(1).is_settled

    result = invoke("receivable", "list", "--status", "received")
    assert "Consultoria" in result.output


def test_payable_update(invoke, db):
    invoke("payable", "add", "-d", "Energia", "-a", "850", "--due-date", "2024-06-08")

    result = invoke("payable", "update", "1", "-a", "900,50", "--notes", "Reajuste")
    assert result.exit_code == 0
    assert "Updated payable 'Energia' (ID: 1)" in result.output
    payable = db.get_payable(1)
    assert str(payable.amount) == "900.50"
    assert payable.notes == "Reajuste"

    result = invoke("payable", "update", "1", "--status", "paid")
    assert result.exit_code == 1
    assert "Payment date is required" in result.output
    assert db.get_payable(1).is_settled is False

    result = invoke("payable", "update", "1", "--status", "paid", "--paid-on", "2024-06-09")
    assert result.exit_code == 0
    assert db.get_payable(1).payment_date == date(2024, 6, 9)


def test_payable_update_without_options(invoke):
    invoke("payable", "add", "-d", "Energia", "-a", "850", "--due-date", "2024-06-08")
    result = invoke("payable", "update", "1")
    assert result.exit_code == 0
    assert "Nothing to update." in result.output


def test_payable_update_missing(invoke):
    result = invoke("payable", "update", "9", "--notes", "x")
    assert result.exit_code == 1
    assert "Payable 9 not found" in result.output


def test_receivable_update(invoke, db):
    invoke("receivable", "add", "-d", "Consultoria", "-a", "8500", "--due-date", "2024-06-09")

    result = invoke("receivable", "update", "1", "--due-date", "in 5 days", "--today", "2024-06-10")
    assert result.exit_code == 0
    assert db.get_receivable(1).due_date == date(2024, 6, 15)

    result = invoke("receivable", "update", "1", "--status", "received")
    assert result.exit_code == 1
    assert "Received date is required" in result.output


def test_dashboard(invoke):
    invoke("payable", "add", "-d", "Energia", "-a", "100", "--due-date", "2024-06-08")
    invoke("receivable", "add", "-d", "Venda", "-a", "500", "--due-date", "2024-06-10")

    result = invoke("dashboard", "--today", "2024-06-10")
    assert result.exit_code == 0
    assert "Dashboard as of 2024-06-10" in result.output
    assert "400.00" in result.output


def test_cash_flow(invoke):
    invoke("receivable", "add", "-d", "Venda", "-a", "200", "--due-date", "2024-06-07", "--received-on", "2024-06-07")
    invoke("payable", "add", "-d", "Taxa", "-a", "50", "--due-date", "2024-06-07", "--paid-on", "2024-06-07")

    result = invoke("cash-flow", "--today", "2024-06-10")
    assert result.exit_code == 0
    assert "2024-06-03" in result.output
    assert "2024-06-17" in result.output
    assert "projected" in result.output

    result = invoke("cash-flow", "--period", "monthly", "--summary", "--today", "2024-06-10")
    assert result.exit_code == 0
    assert "Net flow" in result.output
    assert "150.00" in result.output


def test_cash_flow_buckets_by_effective_date(invoke):
    result = invoke("cash-flow", "--help")
    assert "effective" in result.output
    assert "settlement" in result.output

    invoke("payable", "add", "-d", "Atrasada", "-a", "40", "--due-date", "2024-06-05")
    invoke("receivable", "add", "-d", "Venda", "-a", "90", "--due-date", "2024-06-01", "--received-on", "2024-06-08")

    result = invoke("cash-flow", "--today", "2024-06-10")
    lines = {line.split(" |")[0]: line for line in result.output.splitlines() if line.startswith("2024-")}
    assert "40.00" in lines["2024-06-05"]
    assert "90.00" in lines["2024-06-08"]
    assert "projected" not in lines["2024-06-05"]
    assert "projected" in lines["2024-06-11"]


def test_reports_near_the_last_representable_date(invoke):
    invoke("payable", "add", "-d", "Taxa", "-a", "50", "--due-date", "2024-06-07")

    result = invoke("cash-flow", "--period", "monthly", "--today", "9999-12-30")
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)

    result = invoke("dashboard", "--today", "9999-12-30")
    assert result.exit_code == 1
    assert "Error:" in result.output

    result = invoke("payable", "upcoming", "--today", "9999-12-30")
    assert result.exit_code == 1
    assert "Error:" in result.output

    result = invoke("payable", "add", "-d", "X", "-a", "1", "--due-date", "in 99999999 days")
    assert result.exit_code == 1
    assert "Invalid due date" in result.output


def test_category_expenses_and_dre(invoke):
    invoke("seed", "--no-samples")
    invoke("payable", "add", "-d", "Aluguel", "-a", "200", "--due-date", "2024-06-05", "--category", "7")
    invoke("receivable", "add", "-d", "Venda", "-a", "1000", "--due-date", "2024-06-05", "--category", "1")

    result = invoke("category-expenses")
    assert result.exit_code == 0
    assert "Aluguel" in result.output
    assert "100.0%" in result.output

    result = invoke("dre", "--year", "2024", "--month", "6")
    assert result.exit_code == 0
    assert "DRE 2024-06" in result.output
    assert "800.00" in result.output


def test_dre_rejects_invalid_month(invoke):
    result = invoke("dre", "--year", "2024", "--month", "13")
    assert result.exit_code == 1
    assert "between 1 and 12" in result.output


def test_seed_twice(invoke):
    result = invoke("seed", "--today", "2024-06-10")
    assert result.exit_code == 0
    assert "Created 11 categories" in result.output

    result = invoke("seed")
    assert "already exist" in result.output


def test_db_url_option(cli_runner, tmp_path):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    result = cli_runner.invoke(cli, ["--db-url", url, "client", "create", "Persisted"])
    assert result.exit_code == 0

    result = cli_runner.invoke(cli, ["--db-url", url, "client", "list"])
    assert "Persisted" in result.output


def test_unknown_timezone(invoke):
    result = invoke("--timezone", "Mars/Base", "dashboard")
    assert result.exit_code == 1
    assert "Unknown timezone" in result.output
