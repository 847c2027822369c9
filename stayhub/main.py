import logging

from fastapi import FastAPI

from stayhub.core.logging import setup_logging
from stayhub.database import init_db
from stayhub.middleware.request_logger import RequestLoggerMiddleware
from stayhub.telegram.bot import create_dispatcher
from stayhub.web.routers import listing_web


# -------------------------------------------------
# Logging
# -------------------------------------------------

setup_logging()
logger = logging.getLogger(__name__)


# -------------------------------------------------
# FastAPI
# -------------------------------------------------

app = FastAPI(
    title="StayHub Booking",
    description="Listing availability, date validation and booking quotes",
    version="0.1.0",
)

app.add_middleware(RequestLoggerMiddleware)
app.include_router(listing_web.router)


# -------------------------------------------------
# Telegram (aiogram)
# -------------------------------------------------

dp = create_dispatcher()


# -------------------------------------------------
# Lifecycle
# -------------------------------------------------


@app.on_event("startup")
async def on_startup():
    logger.info("FastAPI startup")
    await init_db()


@app.get("/health")
async def health():
    return {"ok": True}
