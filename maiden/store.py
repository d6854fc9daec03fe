"""Key-value store contract used by the game, and its Redis implementation.

All values are strings (the Redis client is created with
``decode_responses=True``). Store failures raise
``redis.exceptions.RedisError`` and are never caught here.
"""

import logging
from typing import Dict, List, Optional, Protocol, Tuple

from pydantic import BaseModel
from redis.asyncio import Redis

# KEYS[1]=holder KEYS[2]=streak [KEYS[3]=token]; ARGV[1]=name [ARGV[2]=token]
CLAIM_STREAK_SCRIPT = """
if redis.call('GET', KEYS[1]) ~= ARGV[1] then
  redis.call('SET', KEYS[1], ARGV[1])
  redis.call('SET', KEYS[2], 1)
  if #KEYS > 2 then
    redis.call('SET', KEYS[3], ARGV[2])
  end
  return {1, 1}
end
return {redis.call('INCR', KEYS[2]), 0}
"""


class StoreOperation(BaseModel):
    """One write inside an atomic batch. ``ttl`` of None means no expiry."""

    key: str
    value: str
    ttl: Optional[int] = None


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...

    async def set_with_expiry(self, key: str, value: str, ttl: int) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def increment(self, key: str) -> int: ...

    async def increment_with_expiry(self, key: str, ttl: int) -> int: ...

    async def increment_hash_field(self, key: str, field: str, amount: int = 1) -> int: ...

    async def get_hash_field(self, key: str, field: str) -> Optional[str]: ...

    async def get_all_hash_fields(self, key: str) -> Dict[str, str]: ...

    async def batch(self, operations: List[StoreOperation]) -> None: ...

    async def claim_streak(
        self,
        holder_key: str,
        streak_key: str,
        name: str,
        token_key: Optional[str] = None,
        token: Optional[str] = None,
    ) -> Tuple[int, bool]: ...


class RedisStore:
    """KeyValueStore backed by ``redis.asyncio``."""

    def __init__(self, redis: Redis):
        self.redis = redis
        self._claim_streak = redis.register_script(CLAIM_STREAK_SCRIPT)

    async def get(self, key: str) -> Optional[str]:
        return await self.redis.get(key)

    async def set(self, key: str, value: str) -> None:
        await self.redis.set(key, value)

    async def set_with_expiry(self, key: str, value: str, ttl: int) -> None:
        await self.redis.setex(key, ttl, value)

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)

    async def increment(self, key: str) -> int:
        return int(await self.redis.incr(key))

    async def increment_with_expiry(self, key: str, ttl: int) -> int:
        """Increment a counter and (re)arm its expiry in one transaction.

        Returns:
            int: The counter value after the increment
        """
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.incr(key)
            pipe.expire(key, ttl)
            count, _ = await pipe.execute()
        return int(count)

    async def increment_hash_field(self, key: str, field: str, amount: int = 1) -> int:
        return int(await self.redis.hincrby(key, field, amount))

    async def get_hash_field(self, key: str, field: str) -> Optional[str]:
        return await self.redis.hget(key, field)

    async def get_all_hash_fields(self, key: str) -> Dict[str, str]:
        return await self.redis.hgetall(key)

    async def batch(self, operations: List[StoreOperation]) -> None:
        """Apply a small fixed list of writes as one MULTI/EXEC unit."""
        async with self.redis.pipeline(transaction=True) as pipe:
            for operation in operations:
                if operation.ttl is None:
                    pipe.set(operation.key, operation.value)
                else:
                    pipe.setex(operation.key, operation.ttl, operation.value)
            await pipe.execute()
        logging.debug(f"Applied batch of {len(operations)} writes")

    async def claim_streak(
        self,
        holder_key: str,
        streak_key: str,
        name: str,
        token_key: Optional[str] = None,
        token: Optional[str] = None,
    ) -> Tuple[int, bool]:
        """Atomically reset a streak to a new holder or extend the current one.

        Args:
            holder_key (str): Key holding the current holder's name
            streak_key (str): Key holding the streak length
            name (str): Name of the player who just qualified
            token_key (str, optional): Key of a token that is replaced only on reset
            token (str, optional): Token to store when the holder changes

        Returns:
            Tuple[int, bool]: The streak length after the claim, and whether the holder changed
        """
        keys = [holder_key, streak_key]
        args = [name]
        if token_key is not None:
            keys.append(token_key)
            args.append(token if token is not None else "")
        streak, is_new_holder = await self._claim_streak(keys=keys, args=args)
        return int(streak), bool(int(is_new_holder))
