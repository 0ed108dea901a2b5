"""SQLAlchemy models for brokermap database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    JSON,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Brokerage account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    currency = Column(String(3), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    import_mapping = relationship(
        "ImportMapping", back_populates="account", uselist=False, cascade="all, delete-orphan"
    )
    activities = relationship("Activity", back_populates="account", cascade="all, delete-orphan")


class ImportMapping(Base):
    """Saved CSV import mapping, one per account."""

    __tablename__ = "import_mappings"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), unique=True, nullable=False)
    # {"date": "Trade Date", ...}
    field_mappings = Column(JSON, nullable=False, default=dict)
    # [["BUY", ["BUY", "PURCHASE"]], ...]; a list keeps the configured order
    activity_mappings = Column(JSON, nullable=False, default=list)
    # {"APPL": "AAPL", ...}
    symbol_mappings = Column(JSON, nullable=False, default=dict)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    account = relationship("Account", back_populates="import_mapping")


class Activity(Base):
    """Imported activity model."""

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    date = Column(String, nullable=False)
    symbol = Column(String, nullable=False)
    activity_type = Column(String, nullable=False)
    quantity = Column(Numeric(20, 8), nullable=False)
    unit_price = Column(Numeric(20, 8), nullable=False)
    currency = Column(String(3), nullable=False)
    fee = Column(Numeric(20, 8), nullable=False, default=0)
    amount = Column(Numeric(20, 8), nullable=True)
    comment = Column(String, nullable=True)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="activities")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
