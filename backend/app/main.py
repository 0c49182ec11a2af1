import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.children import router as children_router
from app.api.objectives import router as objectives_router
from app.api.logs import router as logs_router
from app.api.exclusions import router as exclusions_router
from app.api.points import router as points_router
from app.api.tracker import router as tracker_router
from app.db import Base, engine
from app.models.child import Child  # noqa: F401  (import ensures table is registered)
from app.models.objective import Objective  # noqa: F401
from app.models.daily_log import DailyLog  # noqa: F401
from app.models.objective_exclusion import ObjectiveExclusion  # noqa: F401
from app.models.point_transaction import PointTransaction  # noqa: F401
from app.core.config import settings
from app.core.logging_config import configure_logging


configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Objectives Tracker")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables on startup
Base.metadata.create_all(bind=engine)

app.include_router(children_router)
app.include_router(objectives_router)
app.include_router(logs_router)
app.include_router(exclusions_router)
app.include_router(points_router)
app.include_router(tracker_router)

logger.info("Objectives tracker ready (timezone=%s)", settings.timezone)


@app.get("/")
def root():
    return {"message": "Objectives tracker backend is running"}
