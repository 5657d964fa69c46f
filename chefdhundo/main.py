import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# ✅ Import All API Routes
from chefdhundo.api.routes import (
    admin,
    announcements,
    health,
    payment,
    resumes,
    storage,
    system,
    users,
    webhooks,
)
from chefdhundo.core import config
from chefdhundo.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL)

    if config.RUN_MIGRATIONS:
        from chefdhundo.db.migrate import run_migrations
        run_migrations()
    else:
        from chefdhundo.db.init_db import init_db
        init_db()

    logger.info("Chef Dhundo API started")
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="Chef Dhundo API", lifespan=lifespan)

# ✅ CORS: ONLY ALLOW CONFIGURED FRONTENDS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(users.router)
app.include_router(webhooks.router)
app.include_router(resumes.router)
app.include_router(storage.router)
app.include_router(admin.router)
app.include_router(announcements.router)
app.include_router(payment.router)
app.include_router(health.router)
app.include_router(system.router)


# ============================================
# ✅ HEALTH CHECK ROOT ENDPOINT
# ============================================

@app.get("/")
def root():
    return {"status": "Chef Dhundo API running"}
