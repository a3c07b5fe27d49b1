from fastapi import FastAPI, APIRouter, HTTPException, Depends
from starlette.middleware.cors import CORSMiddleware
import sys
import logging
from pathlib import Path
from typing import List

ROOT_DIR = Path(__file__).parent
# playreport lives at the repository root when not installed
sys.path.insert(0, str(ROOT_DIR.parent))

import config
from models.report_models import (
    TelemetryBatch,
    PlayerReports,
    batch_to_entries,
)
from services.telemetry_store import TelemetryStore, TelemetryStoreError
from playreport.records import TelemetryError
from playreport.pipeline import build_player_reports


# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# MongoDB connection (raw telemetry only; reports are never stored)
telemetry_store = TelemetryStore.from_url(
    config.MONGO_URL, config.DB_NAME, config.TELEMETRY_COLLECTION
)

# Create the main app without a prefix
app = FastAPI()

# Create a router with the /api prefix
api_router = APIRouter(prefix="/api")


def get_telemetry_store() -> TelemetryStore:
    return telemetry_store


def to_player_reports(username: str, reports) -> PlayerReports:
    return PlayerReports(
        username=username,
        sessionCount=len(reports),
        reports=[report.to_dict() for report in reports],
    )


@api_router.get("/")
async def root():
    return {"message": "Play Report API"}

@api_router.get("/health")
async def health():
    return {"status": "ok"}


@api_router.post("/reports", response_model=List[PlayerReports])
async def create_reports(batch: TelemetryBatch):
    """
    Build session reports for every player in a posted telemetry batch.
    Players are reported independently, in first-seen order.
    """
    try:
        reports_by_player = build_player_reports(batch_to_entries(batch))
    except TelemetryError as e:
        logger.error(f"Rejected telemetry batch: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return [
        to_player_reports(username, reports)
        for username, reports in reports_by_player.items()
    ]


@api_router.get("/reports/{username}", response_model=PlayerReports)
async def get_player_reports(
    username: str,
    store: TelemetryStore = Depends(get_telemetry_store)
):
    """
    Fetch a player's stored telemetry and build their session reports,
    most recent session first. A player with no telemetry has no reports.
    """
    try:
        entries = await store.fetch_player_entries(username)
    except TelemetryStoreError as e:
        logger.error(f"Telemetry store error: {e}")
        raise HTTPException(status_code=502, detail="Error fetching telemetry")

    try:
        reports_by_player = build_player_reports(entries)
    except TelemetryError as e:
        logger.error(f"Invalid stored telemetry for {username}: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return to_player_reports(username, reports_by_player.get(username, []))


# Include the router in the main app
app.include_router(api_router)

app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("shutdown")
async def shutdown_db_client():
    telemetry_store.close()
