"""Game state store for FairDice."""

import asyncio
from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:
    from fairdice.services.game_service import DiceGame


# In-memory state stores. Games are never persisted.
games: Dict[str, "DiceGame"] = {}
games_lock = asyncio.Lock()
