"""Concrete RecordStore implementation backed by SQLAlchemy."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio_cms.application.interfaces import RecordStore
from portfolio_cms.domain.entities import get_spec
from portfolio_cms.domain.exceptions import RecordStoreError
from portfolio_cms.infrastructure.database.models import PortfolioRecordModel

logger = logging.getLogger(__name__)


class SQLAlchemyRecordStore(RecordStore):
    """Implements the RecordStore port on the ``portfolio_records`` table.

    The store is long-lived (shared by the migration runner and the page
    loaders), so each operation opens its own short session and commits it.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str, collection: str) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise RecordStoreError(operation, collection, str(exc)) from exc

    @staticmethod
    def _to_dict(model: PortfolioRecordModel) -> dict[str, Any]:
        """Map ORM model → plain field map."""
        return {**model.data, "id": model.id}

    @staticmethod
    def _order_by(collection: str) -> tuple:
        try:
            spec = get_spec(collection)
        except ValueError:
            return (PortfolioRecordModel.id.asc(),)
        if spec.newest_first:
            return (PortfolioRecordModel.created_at.desc(), PortfolioRecordModel.id.desc())
        if spec.ordered:
            return (
                PortfolioRecordModel.display_order.is_(None),
                PortfolioRecordModel.display_order.asc(),
                PortfolioRecordModel.id.asc(),
            )
        return (PortfolioRecordModel.id.asc(),)

    async def _get_model(
        self, session: AsyncSession, collection: str, record_id: int
    ) -> PortfolioRecordModel | None:
        model = await session.get(PortfolioRecordModel, record_id)
        if model is None or model.collection != collection:
            return None
        return model

    # ── RecordStore ─────────────────────────────────────────────────

    async def get_all(self, collection: str) -> list[dict[str, Any]]:
        async with self._session("get_all", collection) as session:
            stmt = (
                select(PortfolioRecordModel)
                .where(PortfolioRecordModel.collection == collection)
                .order_by(*self._order_by(collection))
            )
            result = await session.execute(stmt)
            return [self._to_dict(row) for row in result.scalars().all()]

    async def get_by_id(self, collection: str, record_id: int) -> dict[str, Any] | None:
        async with self._session("get_by_id", collection) as session:
            model = await self._get_model(session, collection, record_id)
            return self._to_dict(model) if model else None

    async def create(self, collection: str, fields: dict[str, Any]) -> dict[str, Any]:
        data = {k: v for k, v in fields.items() if k != "id"}
        async with self._session("create", collection) as session:
            model = PortfolioRecordModel(
                collection=collection,
                data=data,
                display_order=data.get("display_order"),
            )
            session.add(model)
            await session.flush()
            logger.debug("Created %s/%d", collection, model.id)
            return self._to_dict(model)

    async def update(
        self, collection: str, record_id: int, fields: dict[str, Any]
    ) -> dict[str, Any] | None:
        async with self._session("update", collection) as session:
            model = await self._get_model(session, collection, record_id)
            if model is None:
                return None
            # Reassign so the JSON column is flagged dirty
            model.data = {**model.data, **{k: v for k, v in fields.items() if k != "id"}}
            if "display_order" in fields:
                model.display_order = fields["display_order"]
            await session.flush()
            return self._to_dict(model)

    async def delete(self, collection: str, record_id: int) -> bool:
        async with self._session("delete", collection) as session:
            model = await self._get_model(session, collection, record_id)
            if model is None:
                return False
            await session.delete(model)
            await session.flush()
            return True

