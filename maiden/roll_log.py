import asyncio
import logging
import os
from datetime import datetime
from typing import List, Protocol


class RollLogSink(Protocol):
    async def append(
        self, arena: str, dice_count: int, dice: List[int], timestamp: datetime, name: str
    ) -> None: ...


def format_timestamp(timestamp: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2022-03-01T12:00:00.000Z"""
    return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CsvRollLog:
    """Appends one CSV line per turn to a file per arena and dice count."""

    def __init__(self, rolls_dir: str):
        self.rolls_dir = rolls_dir

    def path_for(self, arena: str, dice_count: int) -> str:
        return os.path.join(self.rolls_dir, f"{arena}_{dice_count}d100.csv")

    async def append(
        self, arena: str, dice_count: int, dice: List[int], timestamp: datetime, name: str
    ) -> None:
        """Record the raw dice of one turn

        Args:
            arena (str): Arena the turn was taken in
            dice_count (int): Number of dice rolled
            dice (List[int]): Face values in rolling order
            timestamp (datetime): UTC time of the turn
            name (str): Display name of the roller
        """
        line = ",".join(str(die) for die in dice) + f",{format_timestamp(timestamp)},{name}\n"
        path = self.path_for(arena, dice_count)
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write_line, path, line)

    def _write_line(self, path: str, line: str) -> None:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "a", encoding="utf-8") as csv_file:
            csv_file.write(line)
        logging.debug(f"Appended roll to {path}")
