"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mfdash.api.funds import router as funds_router
from mfdash.config import ENABLE_SCHEDULER, LOG_LEVEL
from mfdash.tasks.scheduler import start_scheduler, stop_scheduler

logging.basicConfig(level=LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if ENABLE_SCHEDULER:
        start_scheduler()
    yield
    if ENABLE_SCHEDULER:
        stop_scheduler()


app = FastAPI(title="MF Dashboard", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(funds_router)


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}
