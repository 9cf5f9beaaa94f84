"""
Health check implementations for the application.
"""

import asyncio
import time
from datetime import datetime, timezone
from typing import Any, Dict

import redis.asyncio as aioredis
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config.logging import get_logger
from marketplace.config.settings import settings
from marketplace.domain.value_objects.job_status import JobStatus
from marketplace.infrastructure.database.models.job import JobModel

logger = get_logger(__name__)


class HealthChecker:
    """Health checker for application components."""

    def __init__(self, db_session: AsyncSession, redis_url: str = None):
        self.db_session = db_session
        self.redis_url = redis_url or settings.REDIS_URL
        self.checks = {
            "database": self._check_database,
            "broker": self._check_broker,
            "job_expiry": self._check_job_expiry,
        }

    async def run_health_checks(self) -> Dict[str, Any]:
        """Run all health checks."""
        results = {}

        for check_name, check_func in self.checks.items():
            try:
                results[check_name] = await check_func()
            except Exception as e:
                logger.error("Health check failed", check_name=check_name, error=str(e))
                results[check_name] = {"status": "error", "error": str(e)}

        return results

    async def _check_database(self) -> Dict[str, Any]:
        """Check database connectivity with a trivial query."""
        started = time.perf_counter()
        await self.db_session.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
        }

    async def _check_broker(self) -> Dict[str, Any]:
        """Check the Celery broker (Redis) answers a ping."""
        client = aioredis.from_url(self.redis_url, socket_connect_timeout=2)
        started = time.perf_counter()
        try:
            await asyncio.wait_for(client.ping(), timeout=3)
        finally:
            await client.aclose()
        return {
            "status": "healthy",
            "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
        }

    async def _check_job_expiry(self) -> Dict[str, Any]:
        """Count open jobs whose event has passed but no read has expired yet."""
        overdue = await self.db_session.scalar(
            select(func.count())
            .select_from(JobModel)
            .where(
                JobModel.status == JobStatus.OPEN.value,
                JobModel.event_date < datetime.now(timezone.utc),
            )
        )
        return {"status": "healthy", "overdue_open_jobs": overdue or 0}

    async def is_ready(self) -> bool:
        """The API can serve requests when the database answers."""
        try:
            result = await self._check_database()
        except Exception as e:
            logger.warning("Readiness check failed", error=str(e))
            return False
        return result["status"] == "healthy"
