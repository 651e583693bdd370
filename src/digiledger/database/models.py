"""SQLAlchemy models for digiledger database."""

from datetime import datetime, UTC
from decimal import Decimal
from sqlalchemy import (
    Column,
    BigInteger,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Boolean,
    Enum as SAEnum,
    create_engine,
    event,
    TypeDecorator,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from digiledger.domain.entities import (
    AMOUNT_SCALE,
    AccountCategory,
    EntryType,
    NormalBalance,
    TransactionStatus,
)

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ScaledDecimal(TypeDecorator):
    """Exact Decimal stored as an integer count of ``10 ** -scale`` units.

    SQLite has no decimal type, so ``Numeric`` round-trips through float.
    """

    impl = BigInteger
    cache_ok = True

    def __init__(self, scale: int):
        super().__init__()
        self.scale = scale

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        units = Decimal(value).scaleb(self.scale)
        if units != units.to_integral_value():
            raise ValueError(f"{value} has more than {self.scale} decimal places")
        return int(units)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value).scaleb(-self.scale)


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String(256), unique=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class Account(Base):
    """Ledger account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    code = Column(String(20), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    category = Column(SAEnum(AccountCategory, native_enum=False), nullable=False)
    normal_balance = Column(SAEnum(NormalBalance, native_enum=False), nullable=False)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, nullable=False)


class Transaction(Base):
    """Journal transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    reference_number = Column(String(50), nullable=True)
    description = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    status = Column(
        SAEnum(TransactionStatus, native_enum=False, length=32), nullable=False
    )
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, nullable=False)


class TransactionEntry(Base):
    """Transaction entry model.

    Entries refer to their transaction and account by id only; rows are
    removed together with their transaction through the foreign key.
    """

    __tablename__ = "transaction_entries"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(
        Integer, ForeignKey("transactions.id", ondelete="CASCADE"), nullable=False
    )
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    amount = Column(ScaledDecimal(AMOUNT_SCALE), nullable=False)
    entry_type = Column(SAEnum(EntryType, native_enum=False), nullable=False)
    description = Column(String, nullable=True)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
