import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from .db.engine import Database
from .db.models import APIRequestLog

logger = logging.getLogger(__name__)


class Store:
    """Persistence for API request logs, the reporting side of the lookup service."""

    def __init__(self, db: Database):
        self.db = db

    async def setup(self):
        await self.db.connect()

    async def close(self):
        await self.db.close()

    async def insert_api_request_log(
        self,
        request_id: str,
        user_id: int,
        timestamp: str,
        api_endpoint: str,
        response_time: int,
        status: str,
        error_code: int | None,
    ) -> bool:
        if not self.db.session_factory:
            logger.error("Failed to insert API request log: database not connected.")
            return False

        try:
            async with self.db.session as session:
                session.add(
                    APIRequestLog(
                        request_id=request_id,
                        user_id=user_id,
                        timestamp=timestamp,
                        api_endpoint=api_endpoint,
                        response_time=response_time,
                        status=status,
                        error_code=error_code,
                    )
                )
                await session.commit()
            return True
        except SQLAlchemyError as e:
            logger.error(f"Failed to insert API request log into database: {e}")
            return False

    async def get_api_request_logs(self, limit: int | None = None) -> list[APIRequestLog]:
        stmt = select(APIRequestLog).order_by(APIRequestLog.timestamp.desc())
        if limit:
            stmt = stmt.limit(limit)
        async with self.db.session as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def count_api_requests(self, status: str | None = None) -> int:
        stmt = select(func.count()).select_from(APIRequestLog)
        if status:
            stmt = stmt.where(APIRequestLog.status == status)
        async with self.db.session as session:
            return (await session.execute(stmt)).scalar_one()

    async def average_response_time(self) -> float:
        async with self.db.session as session:
            value = (await session.execute(select(func.avg(APIRequestLog.response_time)))).scalar()
            return float(value or 0.0)

    async def clear_api_request_logs(self):
        async with self.db.session as session:
            await session.execute(delete(APIRequestLog))
            await session.commit()
