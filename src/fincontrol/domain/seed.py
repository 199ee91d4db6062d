"""Default data for a fresh database."""

import logging
from datetime import date, timedelta

from fincontrol.database.base import Database
from fincontrol.domain.category import CategoryService
from fincontrol.domain.cost_center import CostCenterService
from fincontrol.domain.entities import CategoryType, DRECategory
from fincontrol.domain.party import ClientService, SupplierService
from fincontrol.domain.payable import PayableService
from fincontrol.domain.receivable import ReceivableService

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Vendas de Produtos", CategoryType.INCOME, DRECategory.REVENUE),
    ("Prestação de Serviços", CategoryType.INCOME, DRECategory.REVENUE),
    ("Outras Receitas", CategoryType.INCOME, DRECategory.REVENUE),
    ("Impostos sobre Vendas", CategoryType.INCOME, DRECategory.DEDUCTIONS),
    ("Devoluções", CategoryType.INCOME, DRECategory.DEDUCTIONS),
    ("Custo de Mercadorias", CategoryType.EXPENSE, DRECategory.COSTS),
    ("Aluguel", CategoryType.EXPENSE, DRECategory.OPERATIONAL_EXPENSES),
    ("Salários", CategoryType.EXPENSE, DRECategory.OPERATIONAL_EXPENSES),
    ("Marketing", CategoryType.EXPENSE, DRECategory.OPERATIONAL_EXPENSES),
    ("Utilidades", CategoryType.EXPENSE, DRECategory.OPERATIONAL_EXPENSES),
    ("Material de Escritório", CategoryType.EXPENSE, DRECategory.OPERATIONAL_EXPENSES),
]

DEFAULT_COST_CENTERS = [
    ("Administrativo", "Despesas administrativas gerais"),
    ("Comercial", "Departamento de vendas e marketing"),
    ("Operacional", "Operações e produção"),
    ("TI", "Tecnologia da informação"),
]

SAMPLE_SUPPLIERS = [
    {
        "name": "Fornecedor ABC Ltda",
        "document": "12.345.678/0001-90",
        "email": "contato@abc.com",
        "phone": "(11) 3456-7890",
        "address": "Rua das Flores, 123",
    },
    {
        "name": "Distribuidora XYZ",
        "document": "98.765.432/0001-10",
        "email": "vendas@xyz.com",
        "phone": "(11) 9876-5432",
        "address": "Av. Principal, 456",
    },
]

SAMPLE_CLIENTS = [
    {
        "name": "Cliente Premium S.A.",
        "document": "11.222.333/0001-44",
        "email": "compras@premium.com",
        "phone": "(11) 1234-5678",
        "address": "Av. Comercial, 789",
    },
    {
        "name": "Empresa Beta Ltda",
        "document": "44.555.666/0001-77",
        "email": "financeiro@beta.com",
        "phone": "(11) 8765-4321",
        "address": "Rua Industrial, 321",
    },
]

# (description, amount, due in days from today, settled)
SAMPLE_PAYABLES = [
    ("Aluguel do escritório", "5000.00", 5, False),
    ("Conta de energia", "850.00", -2, False),
    ("Internet e telefone", "450.00", 10, False),
    ("Material de escritório", "320.00", -5, True),
    ("Manutenção equipamentos", "1200.00", 15, False),
]

SAMPLE_RECEIVABLES = [
    ("Venda produto lote 001", "15000.00", 3, False),
    ("Serviço de consultoria", "8500.00", -1, False),
    ("Venda produto lote 002", "12000.00", 7, False),
    ("Manutenção mensal", "3500.00", -3, True),
    ("Projeto especial", "25000.00", 20, False),
]


def seed_default_data(db: Database, today: date, with_samples: bool = True) -> bool:
    """Populate an empty database with default categories and cost centers.

    Sample suppliers, clients, payables and receivables dated around ``today``
    are added too unless ``with_samples`` is False.

    Returns:
        False if categories already exist (nothing is written), True otherwise
    """
    if db.list_categories():
        logger.info("Categories already exist, skipping seed")
        return False

    category_service = CategoryService(db)
    for name, category_type, dre_category in DEFAULT_CATEGORIES:
        category_service.create_category(name, category_type, dre_category)

    cost_center_service = CostCenterService(db)
    for name, description in DEFAULT_COST_CENTERS:
        cost_center_service.create_cost_center(name, description)

    if not with_samples:
        return True

    supplier_service = SupplierService(db)
    client_service = ClientService(db)
    supplier_ids = [supplier_service.create_supplier(**data) for data in SAMPLE_SUPPLIERS]
    client_ids = [client_service.create_client(**data) for data in SAMPLE_CLIENTS]

    categories = db.list_categories()
    expense_ids = [c.id for c in categories if c.category_type == CategoryType.EXPENSE]
    revenue_ids = [
        c.id
        for c in categories
        if c.category_type == CategoryType.INCOME and c.dre_category == DRECategory.REVENUE
    ]
    cost_center_ids = [cc.id for cc in db.list_cost_centers()]

    payable_service = PayableService(db)
    for i, (description, amount, offset, settled) in enumerate(SAMPLE_PAYABLES):
        due_date = today + timedelta(days=offset)
        payable_service.create_payable(
            description=description,
            amount=amount,
            due_date=due_date,
            status="paid" if settled else "pending",
            payment_date=due_date if settled else None,
            supplier_id=supplier_ids[i % len(supplier_ids)],
            category_id=expense_ids[i % len(expense_ids)],
            cost_center_id=cost_center_ids[i % len(cost_center_ids)],
        )

    receivable_service = ReceivableService(db)
    for i, (description, amount, offset, settled) in enumerate(SAMPLE_RECEIVABLES):
        due_date = today + timedelta(days=offset)
        receivable_service.create_receivable(
            description=description,
            amount=amount,
            due_date=due_date,
            status="received" if settled else "pending",
            received_date=due_date if settled else None,
            client_id=client_ids[i % len(client_ids)],
            category_id=revenue_ids[i % len(revenue_ids)],
        )

    logger.info("Seeded default data")
    return True
