import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from redis.exceptions import RedisError

from maiden.arena_sync_manager import ArenaSyncManager
from maiden.crud import ReadRecord
from maiden.keys import DailyWindow
from maiden.load_secrets import (
    fast_cooldown,
    fast_emoji,
    redis_host,
    redis_password,
    redis_port,
    rolls_dir,
)
from maiden.randomness import RandomnessSource
from maiden.roll_log import CsvRollLog
from maiden.routers import maiden
from maiden.store import RedisStore
from maiden.turn_engine import TurnEngine

logging.basicConfig(level=logging.INFO)


def install_game(app: FastAPI, store, roll_log=None, randomness=None, window=None) -> None:
    """Wire the store and its collaborators into the application state."""
    window = window or DailyWindow()
    app.state.read_record = ReadRecord(store, window)
    app.state.engine = TurnEngine(
        store,
        randomness=randomness or RandomnessSource(),
        window=window,
        roll_log=roll_log,
        sync_manager=ArenaSyncManager(),
        fast_emoji=fast_emoji,
        fast_cooldown=fast_cooldown,
    )


@asynccontextmanager
async def lifespan(app):
    """Open the Redis connection used by every arena.
    This function is called to start the server.
    """
    redis = Redis(
        host=redis_host,
        port=redis_port,
        password=redis_password,
        decode_responses=True,
        health_check_interval=30,
    )
    install_game(app, RedisStore(redis), roll_log=CsvRollLog(rolls_dir))
    logging.info(f"Connected to Redis at {redis_host}:{redis_port}")
    try:
        yield
    finally:
        await redis.aclose()
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)
app.include_router(maiden.maiden_router)


@app.exception_handler(RedisError)
async def store_failure_handler(request: Request, exc: RedisError):
    logging.error(f"Store failure on {request.method} {request.url.path}: {exc!r}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "There was an error while executing this command!"},
    )


if __name__ == "__main__":
    uvicorn.run("maiden.main:app", host="0.0.0.0", port=8080)
