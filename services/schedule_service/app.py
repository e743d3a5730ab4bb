"""
FastAPI service for schedule operations.

Exposes the produced surface of the planner as REST endpoints: deterministic
synthesis, generative plans, manual block shifts, the display filter and
course permission toggles. The service keeps no state between requests.
"""
from __future__ import annotations

import logging
import typing as t
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request

from course_provider.sync import sync_course_data
from generative.client import request_plan
from planner.blocks import adjust_block, filter_visible_blocks, toggle_course_access
from planner.formatting import format_schedule
from planner.synthesizer import synthesize
from planner.timeutils import parse_instant
from services.shared.models import (
    AdjustBlockRequest,
    Assignment,
    Course,
    CoursesResponse,
    FilterScheduleRequest,
    GeneratePlanRequest,
    PersonalEvent,
    ScheduleBlock,
    ScheduleResponse,
    ShowScheduleRequest,
    ShowScheduleResponse,
    SynthesizeRequest,
    SyncResponse,
    ToggleCourseRequest,
)
from shared.config import Configuration
from shared.errors import MissingCredentialsError, RequestError

logger = logging.getLogger("schedule_service")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load configuration on startup."""
    load_dotenv()
    app.state.config = Configuration()
    logging.basicConfig(level=app.state.config.log_level.upper())
    logger.info("Schedule service started")
    yield


app = FastAPI(
    title="Schedule Service",
    description="REST API for merging coursework, personal events and preferences into a daily schedule",
    version="1.0.0",
    lifespan=lifespan,
)


def get_config(request: Request) -> Configuration:
    config = getattr(request.app.state, "config", None)
    return config if config is not None else Configuration()


def get_generative_client() -> t.Any:
    """Client for the generative service; None lets the requester build its own."""
    return None


def _schedule_response(blocks) -> ScheduleResponse:
    return ScheduleResponse(blocks=[ScheduleBlock.from_dataclass(b) for b in blocks])


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "schedule-service"}


@app.post("/schedule/synthesize", response_model=ScheduleResponse)
async def synthesize_schedule(request: SynthesizeRequest) -> ScheduleResponse:
    """
    Build the deterministic schedule.

    Fast and offline; the only time dependency is the AI sprint block, which
    can be pinned with `now`.
    """
    blocks = synthesize(
        [a.to_dataclass() for a in request.assignments],
        [c.to_dataclass() for c in request.courses],
        [e.to_dataclass() for e in request.events],
        request.preferences.to_dataclass(),
        now=parse_instant(request.now) if request.now else None,
    )
    return _schedule_response(blocks)


@app.post("/schedule/generate", response_model=ScheduleResponse)
async def generate_schedule(
        request: GeneratePlanRequest,
        config: Configuration = Depends(get_config),
        client: t.Any = Depends(get_generative_client),
) -> ScheduleResponse:
    """
    Ask the generative service for a plan.

    Blocks are returned in the order the service produced them.
    """
    try:
        blocks = await request_plan(
            [a.to_dataclass() for a in request.assignments],
            [e.to_dataclass() for e in request.events],
            request.preferences.to_dataclass(),
            config=config,
            client=client,
        )
    except MissingCredentialsError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except RequestError as e:
        logger.warning("Generative plan failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e))
    return _schedule_response(blocks)


@app.post("/schedule/adjust", response_model=ScheduleResponse)
async def adjust_schedule_block(request: AdjustBlockRequest) -> ScheduleResponse:
    """Shift one block by a signed number of minutes."""
    blocks = adjust_block(
        [b.to_dataclass() for b in request.blocks],
        request.block_id,
        request.minutes,
    )
    return _schedule_response(blocks)


@app.post("/schedule/visible", response_model=ScheduleResponse)
async def filter_schedule(request: FilterScheduleRequest) -> ScheduleResponse:
    """Return the blocks visible under the given permissions and preferences."""
    blocks = filter_visible_blocks(
        [b.to_dataclass() for b in request.blocks],
        [c.to_dataclass() for c in request.courses],
        request.preferences.to_dataclass(),
    )
    return _schedule_response(blocks)


@app.post("/schedule/show", response_model=ShowScheduleResponse)
async def show_schedule(request: ShowScheduleRequest) -> ShowScheduleResponse:
    """Format a schedule into a readable table."""
    text = format_schedule([b.to_dataclass() for b in request.blocks], request.timezone)
    return ShowScheduleResponse(formatted_schedule=text)


@app.post("/courses/toggle", response_model=CoursesResponse)
async def toggle_course(request: ToggleCourseRequest) -> CoursesResponse:
    """Flip one course's access permission."""
    courses = toggle_course_access([c.to_dataclass() for c in request.courses], request.course_id)
    return CoursesResponse(courses=[Course.from_dataclass(c) for c in courses])


@app.post("/courses/sync", response_model=SyncResponse)
def sync_courses(config: Configuration = Depends(get_config)) -> SyncResponse:
    """
    Pull courses and assignments from Canvas.

    Falls back to offline sample data when Canvas is not configured or fails;
    `offline` tells the caller which one it got.
    """
    result = sync_course_data(config)
    return SyncResponse(
        courses=[Course.from_dataclass(c) for c in result.courses],
        assignments=[Assignment.from_dataclass(a) for a in result.assignments],
        events=[PersonalEvent.from_dataclass(e) for e in result.events],
        schedule=[ScheduleBlock.from_dataclass(b) for b in result.schedule],
        status=result.status,
        offline=result.offline,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8004)
