# admin_console/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from admin_console.core.config import settings
from admin_console.core.errors import register_exception_handlers
from admin_console.core.logging import configure_logging
from admin_console.db.mongo import close_client, ensure_indexes, get_client, get_db, init_client
from admin_console.routes.address_forms import router as address_forms_router
from admin_console.routes.admins import router as admins_router
from admin_console.routes.auth import router as auth_router
from admin_console.routes.office import router as office_router
from admin_console.routes.pincodes import router as pincodes_router
from admin_console.routes.users import router as users_router
from admin_console.services.auth_service import AuthService

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup: create client and verify connection
    init_client()
    try:
        await get_client().admin.command("ping")
        logger.info("Connected to MongoDB")
    except Exception:
        logger.exception("Mongo ping failed")
        raise
    await ensure_indexes()
    await AuthService().seed_default_admin()
    yield
    # shutdown: close client
    close_client()
    logger.info("MongoDB connection closed")


app = FastAPI(title="OCL Admin Console", lifespan=lifespan)
register_exception_handlers(app)


@app.get("/health")
async def root():
    return {"message": "OCL admin console is running."}


@app.get("/ping")
async def ping():
    await get_db().command("ping")
    return {"message": "pong"}


app.include_router(auth_router)
app.include_router(address_forms_router)
app.include_router(pincodes_router)
app.include_router(admins_router)
app.include_router(users_router)
app.include_router(office_router)
