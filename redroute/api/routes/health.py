"""
Operational endpoints: health, database debug view, demo seed.
Debug and seed are hidden in production.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from redroute.db.session import get_db
from redroute.services.health_service import database_status, table_counts, table_names
from redroute.services.seed_service import seed_demo_data
from redroute.services.cache_service import get_cache_stats, invalidate_list_cache
from redroute.core.config import get_settings
from redroute.core.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()
router = APIRouter(tags=["Health"])


def _require_non_production() -> None:
    if settings.is_production:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check endpoint for Docker and load balancers."""
    try:
        db_status = await database_status(db)
    except Exception as e:
        logger.error("health_check_failed", error=str(e))
        await db.rollback()
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"ok": False, "db": "unreachable", "error": type(e).__name__},
        )

    return {
        "ok": True,
        **db_status,
        "cache": await get_cache_stats(),
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


@router.get("/debug/db", dependencies=[Depends(_require_non_production)])
async def debug_db(db: AsyncSession = Depends(get_db)):
    """Row counts and table names."""
    return {
        "ok": True,
        "counts": await table_counts(db),
        "tables": await table_names(db),
    }


@router.post("/seed", dependencies=[Depends(_require_non_production)])
async def seed(db: AsyncSession = Depends(get_db)):
    """Insert demo hotels and events once."""
    seeded = await seed_demo_data(db)
    if seeded:
        await db.commit()
        await invalidate_list_cache("hotels")
        await invalidate_list_cache("events")
    return {"ok": True, "alreadySeeded": not seeded}
