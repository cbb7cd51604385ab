"""SQLAlchemy models for the saloonlite database."""

from datetime import datetime
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Numeric,
    Boolean,
    JSON,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Service(Base):
    """Service catalog model."""

    __tablename__ = "services"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, nullable=False)


class Transaction(Base):
    """Sale or expense model.

    Expenses keep their vendor in the ``service`` column.
    """

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    type = Column(String, nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    datetime = Column(DateTime, nullable=False, index=True)
    date_key = Column(String(10), nullable=False, index=True)
    customer = Column(String, nullable=True)
    service = Column(String, nullable=True)
    category = Column(String, nullable=True)
    description = Column(String, nullable=True)
    payment_method = Column(String, nullable=True)


class DailySummary(Base):
    """Per-day aggregate model, keyed by date key."""

    __tablename__ = "summaries"

    date_key = Column(String(10), primary_key=True)
    date = Column(Date, nullable=False)
    total_sales = Column(Numeric(12, 2), default=0, nullable=False)
    total_expenses = Column(Numeric(12, 2), default=0, nullable=False)
    net_profit = Column(Numeric(12, 2), default=0, nullable=False)
    transaction_count = Column(Integer, default=0, nullable=False)


class Preference(Base):
    """User preferences document."""

    __tablename__ = "preferences"

    id = Column(String, primary_key=True)
    data = Column(JSON, nullable=False)


class Setting(Base):
    """App settings document."""

    __tablename__ = "settings"

    id = Column(String, primary_key=True)
    data = Column(JSON, nullable=False)


class PinSetting(Base):
    """PIN singleton model."""

    __tablename__ = "pin_settings"

    id = Column(String, primary_key=True)
    pin = Column(String(4), nullable=False)
    is_enabled = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, nullable=False)
    last_modified = Column(DateTime, nullable=False)
    failed_attempts = Column(Integer, default=0, nullable=False)
    last_attempt = Column(DateTime, nullable=True)
    lock_until = Column(DateTime, nullable=True)
    is_locked = Column(Boolean, default=False, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
