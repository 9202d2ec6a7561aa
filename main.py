import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.core.config import AUTO_CREATE_DATABASE, LOG_LEVEL
from app.db.session import create_tables, ensure_database, guard
from app.routers import archive as archive_router

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

if AUTO_CREATE_DATABASE:
    ensure_database()

create_tables()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    guard.close()


app = FastAPI(title="Archive Bot", lifespan=lifespan)

app.include_router(archive_router.router, prefix="/api/archive", tags=["Archive"])
