from sqlalchemy import (
    Column,
    String,
    DateTime,
    ForeignKey,
    DECIMAL,
    CheckConstraint,
    Enum,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime, timezone
from ..database.core import Base
import enum


class TransactionType(enum.Enum):
    INCOME = "income"
    OUTCOME = "outcome"

    @property
    def display_name(self):
        return "Receita" if self == TransactionType.INCOME else "Despesa"


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False, index=True)
    value = Column(DECIMAL(10, 2), nullable=False)
    type = Column(
        Enum(TransactionType, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    category_id = Column(
        UUID(as_uuid=True),
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (CheckConstraint("value > 0", name="ck_transaction_value_positive"),)

    # Relationships
    category = relationship("Category", lazy="joined")

    def __repr__(self):
        return f"<Transaction(title='{self.title}', value='{self.value}', type='{self.type}', category_id='{self.category_id}')>"
