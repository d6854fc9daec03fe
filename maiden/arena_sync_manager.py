import logging
from asyncio import Lock
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict


class ArenaSyncManager:
    """Hands out one asyncio.Lock per arena.

    Turns in the same arena are serialized within this process; turns in
    different arenas never wait on each other. Other processes sharing the
    same Redis are not covered. A lock is forgotten as soon as no turn holds
    or waits for it.
    """

    def __init__(self):
        self.arena_locks: Dict[str, Lock] = {}
        self.users: Dict[str, int] = {}  # turns holding or waiting per arena
        self.lock = Lock()  # protects arena_locks and users

    @asynccontextmanager
    async def hold(self, arena: str) -> AsyncIterator[None]:
        """Hold the turn lock of the specified arena

        Args:
            arena (str): Arena identifier
        """
        async with self.lock:
            if arena not in self.arena_locks:
                self.arena_locks[arena] = Lock()
                logging.debug(f"Created turn lock for arena: {arena}")
            arena_lock = self.arena_locks[arena]
            self.users[arena] = self.users.get(arena, 0) + 1
        try:
            async with arena_lock:
                yield
        finally:
            async with self.lock:
                self.users[arena] -= 1
                if self.users[arena] == 0:
                    del self.users[arena]
                    del self.arena_locks[arena]
