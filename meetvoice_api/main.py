from contextlib import asynccontextmanager

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from meetvoice_api.api import articles
from meetvoice_api.config import LOG_LEVEL, ROOT_PATH
from meetvoice_api.core.errors import register_exception_handlers
from meetvoice_api.db import mongo

HEALTH_TEXT = "MeetVoice API OK"

logger = logging.getLogger("meetvoice_api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await mongo.connect_db()
    logger.info("MeetVoice API started", extra={"event": "app_started"})
    try:
        yield
    finally:
        await mongo.close_db()


app = FastAPI(
    title="MeetVoice API",
    lifespan=lifespan,
    root_path=ROOT_PATH,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)
app.include_router(articles.router)


@app.get("/", response_class=PlainTextResponse, summary="Health check")
async def health() -> str:
    return HEALTH_TEXT


# Basic logging configuration (can be overridden by server config)
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
# pymongo logs every heartbeat at DEBUG
logging.getLogger("pymongo").setLevel(logging.WARNING)
