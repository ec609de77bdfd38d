import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from core import db, envelope, settings
from sightings import router as sightings_router
from sightings import service as sightings_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process. Startup never fails on storage:
    # requests surface storage errors individually instead.
    try:
        await db.init_pool()
    except Exception:
        logger.exception("db_pool_init_failed")
    await sightings_service.initialize_storage()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="Wildlife Sighting API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)
envelope.install_handlers(app)

app.include_router(sightings_router.router, prefix="/api", tags=["sightings"])


@app.get("/api/health")
async def health() -> dict:
    try:
        await db.ping()
    except db.StorageError as exc:
        logger.warning("health_check_failed error=%s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database connection failed",
        ) from exc
    return envelope.success(
        message="API is running and database is connected",
        timestamp=envelope.iso_timestamp(datetime.now(timezone.utc)),
    )


def run() -> None:
    logging.basicConfig(
        level=settings.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    port = settings.port()
    logger.info("Wildlife Sighting API running on port %s", port)
    uvicorn.run(app, host=settings.host(), port=port, log_level=settings.log_level().lower())


if __name__ == "__main__":
    run()
