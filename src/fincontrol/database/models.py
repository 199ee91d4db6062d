"""SQLAlchemy models for fincontrol database."""

from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Client(Base):
    """Client model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    document = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)

    receivables = relationship("AccountReceivable", back_populates="client")


class Supplier(Base):
    """Supplier model."""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    document = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)

    payables = relationship("AccountPayable", back_populates="supplier")


class Category(Base):
    """Category model.

    category_type: 'income' or 'expense'
    dre_category: 'revenue', 'deductions', 'costs', 'operational_expenses' or NULL
    """

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category_type = Column(String, nullable=False)
    dre_category = Column(String, nullable=True)


class CostCenter(Base):
    """Cost center model."""

    __tablename__ = "cost_centers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)

    payables = relationship("AccountPayable", back_populates="cost_center")


class AccountPayable(Base):
    """Account payable model."""

    __tablename__ = "accounts_payable"

    id = Column(Integer, primary_key=True)
    description = Column(String, nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    payment_date = Column(Date, nullable=True)
    status = Column(String, nullable=False, default="pending")
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    cost_center_id = Column(Integer, ForeignKey("cost_centers.id"), nullable=True)
    notes = Column(String, nullable=True)
    recurrence = Column(String, nullable=True)
    attachment_url = Column(String, nullable=True)

    # Relationships
    supplier = relationship("Supplier", back_populates="payables")
    category = relationship("Category")
    cost_center = relationship("CostCenter", back_populates="payables")


class AccountReceivable(Base):
    """Account receivable model."""

    __tablename__ = "accounts_receivable"

    id = Column(Integer, primary_key=True)
    description = Column(String, nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    received_date = Column(Date, nullable=True)
    status = Column(String, nullable=False, default="pending")
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    notes = Column(String, nullable=True)

    # Relationships
    client = relationship("Client", back_populates="receivables")
    category = relationship("Category")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
