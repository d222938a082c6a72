import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.log import configure_logging
from app.api.v1.api import router as api_v1_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # db's handled by alembic migrations
    # run 'alembic upgrade head' or scripts/init_db.py
    logger.info(f"Open hours API starting (env={settings.APP_ENV}, reference tz={settings.REFERENCE_TIMEZONE})")
    yield


app = FastAPI(title="Open Hours API", version="0.1.0", lifespan=lifespan)

# set up CORS so the storefront and admin UI can talk to us
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# mount our API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
def health():
    return {"status": "ok", "env": settings.APP_ENV}
