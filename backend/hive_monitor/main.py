import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hive_monitor.config import CORS_ORIGINS
from hive_monitor.database import init_store
from hive_monitor.logging_config import setup_logging
from hive_monitor.routes.readings import router as readings_router

# Initialize logging before anything else
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Hive Monitor", version="0.1.0")
logger.info("FastAPI app created")

app.include_router(readings_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    logger.info("Hive Monitor starting up")
    # Refuse to serve traffic against a store we cannot reach
    await init_store()
    logger.info("Reading store ready")


@app.get("/health")
async def health_check():
    return {"status": "ok"}
