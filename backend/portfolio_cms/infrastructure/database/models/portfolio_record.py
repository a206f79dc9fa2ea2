"""SQLAlchemy ORM model for portfolio entity records."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_cms.infrastructure.database.base import Base


class PortfolioRecordModel(Base):
    """ORM model — maps to the 'portfolio_records' table.

    Every collection (and the home-data singleton) shares this table; the
    record's fields live in ``data``. ``display_order`` is copied out of
    ``data`` so ordered collections can be sorted in SQL.
    """

    __tablename__ = "portfolio_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection: Mapped[str] = mapped_column(String(50), nullable=False)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    display_order: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_portfolio_records_collection", "collection", "display_order"),
    )

    def __repr__(self) -> str:
        return f"<PortfolioRecordModel(id={self.id}, collection='{self.collection}')>"
