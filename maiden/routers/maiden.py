import logging
from typing import Literal

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from redis.exceptions import RedisError

from maiden.crud import ReadRecord
from maiden.errors import ConsecutiveTurnRejection
from maiden.formatter import render_highscore, render_outcome
from maiden.models.dc_models import (
    HighscoreResponseModel,
    LeaderboardModel,
    RollOutcomeModel,
    RollRequestModel,
    RollResponseModel,
)
from maiden.models.record_models import (
    AllTimeRecordSchema,
    CurrentHoldersSchema,
    DailyRecordSchema,
)
from maiden.turn_engine import TurnEngine

maiden_router = APIRouter(prefix="/arenas/{arena}")


def get_engine(request: Request) -> TurnEngine:
    return request.app.state.engine


def get_read_record(request: Request) -> ReadRecord:
    return request.app.state.read_record


async def record_turn_in_background(engine: TurnEngine, outcome: RollOutcomeModel) -> None:
    try:
        await engine.record_turn(outcome)
    except (RedisError, OSError) as e:
        logging.error(f"Failed to record turn statistics in {outcome.arena}: {e}")


@maiden_router.post("/roll", response_model=RollResponseModel)
async def roll(
    arena: str,
    roll_request: RollRequestModel,
    background_tasks: BackgroundTasks,
    engine: TurnEngine = Depends(get_engine),
    read_record: ReadRecord = Depends(get_read_record),
):
    """Try for the max score on xd100."""
    try:
        name = await read_record.lookup_display_name(arena, roll_request.player_id)
        outcome = await engine.resolve_turn(arena, roll_request.player_id, name)
    except ConsecutiveTurnRejection as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

    background_tasks.add_task(record_turn_in_background, engine, outcome)
    return RollResponseModel(outcome=outcome, message=render_outcome(outcome))


@maiden_router.get("/highscore", response_model=HighscoreResponseModel)
async def highscore(arena: str, read_record: ReadRecord = Depends(get_read_record)):
    """Show the xd100 rolling record."""
    report = await read_record.get_highscore_report(arena)
    return HighscoreResponseModel(report=report, message=render_highscore(report))


@maiden_router.get("/records/all_time", response_model=AllTimeRecordSchema)
async def all_time_record(arena: str, read_record: ReadRecord = Depends(get_read_record)):
    return await read_record.get_all_time_record(arena)


@maiden_router.get("/records/daily/{which}", response_model=DailyRecordSchema)
async def daily_record(
    arena: str,
    which: Literal["today", "yesterday"],
    read_record: ReadRecord = Depends(get_read_record),
):
    return await read_record.get_daily_record(arena, which)


@maiden_router.get("/leaderboard", response_model=LeaderboardModel)
async def leaderboard(arena: str, read_record: ReadRecord = Depends(get_read_record)):
    return await read_record.get_leaderboard_counts(arena)


@maiden_router.get("/holders", response_model=CurrentHoldersSchema)
async def holders(arena: str, read_record: ReadRecord = Depends(get_read_record)):
    return await read_record.get_current_holders(arena)
