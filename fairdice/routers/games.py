"""Game router for FairDice.

Drives a DiceGame one step per request. Every choice endpoint takes the raw
choice text and also accepts "X" (abandon the game) and "?" (probability
table; the game stays where it was).
"""

from typing import Callable

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool

from fairdice.constants import EXIT_OPTION, HELP_OPTION, INVALID_INPUT_MESSAGE
from fairdice.exceptions import (
    DieUnavailableError,
    GamePhaseError,
    InsufficientDistributionsError,
    InvalidDiceError,
    InvalidInputError,
)
from fairdice.models.game import games, games_lock
from fairdice.models.requests import ChoiceRequest, GameCreateRequest
from fairdice.models.responses import GameStateResponse
from fairdice.services.game_service import DiceGame
from fairdice.services.table_service import build_dice_set, table_payload
from fairdice.utils.choices import Choice, parse_choice

router = APIRouter(prefix="/games", tags=["games"])


def get_game(game_id: str) -> DiceGame:
    game = games.get(game_id)
    if not game:
        raise HTTPException(status_code=404, detail="Game not found")
    return game


async def run_step(game_id: str, raw: str, options: Callable[[DiceGame], list[str]], step):
    """Parse a choice and run one game step, translating domain errors."""
    async with games_lock:
        game = get_game(game_id)
        try:
            choice: Choice = parse_choice(raw, options(game) + [EXIT_OPTION, HELP_OPTION])
        except InvalidInputError:
            raise HTTPException(status_code=400, detail=INVALID_INPUT_MESSAGE)
        except GamePhaseError as e:
            raise HTTPException(status_code=409, detail=str(e))

        if choice.kind == "exit":
            games.pop(game_id, None)
            return {"exited": True, "game_id": game_id}
        if choice.kind == "option":
            try:
                result = step(game, choice.value)
            except GamePhaseError as e:
                raise HTTPException(status_code=409, detail=str(e))
            except (InvalidInputError, DieUnavailableError):
                raise HTTPException(status_code=400, detail=INVALID_INPUT_MESSAGE)
            return {**result, "game": game.state()}
        state = game.state()

    # Help leaves the game untouched; estimate without holding the lock
    table = await run_in_threadpool(table_payload, game.dice)
    return {"help": table, "game": state}


@router.post("")
async def create_game(body: GameCreateRequest):
    """Create a game and commit to the first-move coin.

    The response carries the proof; the value and key stay hidden until
    the guess is submitted.
    """
    try:
        dice = build_dice_set(body.dice)
    except (InvalidDiceError, InsufficientDistributionsError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    game = DiceGame(dice)
    commitment = game.start_first_move()
    async with games_lock:
        games[game.game_id] = game
    return {
        "game_id": game.game_id,
        "commitment": commitment.to_dict(),
        "options": game.first_move_options(),
        "game": game.state(),
    }


@router.get("/{game_id}", response_model=GameStateResponse)
async def game_state(game_id: str):
    """Return the public state of a game."""
    async with games_lock:
        return get_game(game_id).state()


@router.get("/{game_id}/help")
async def game_help(game_id: str):
    """Win probabilities for every pair of the game's dice."""
    async with games_lock:
        game = get_game(game_id)
    return await run_in_threadpool(table_payload, game.dice)


@router.post("/{game_id}/first-move")
async def first_move(game_id: str, body: ChoiceRequest):
    """Submit a guess for the first-move coin and reveal it."""
    def options(game: DiceGame) -> list[str]:
        return game.first_move_options()

    def step(game: DiceGame, guess: int) -> dict:
        return game.resolve_first_move(guess).to_dict()

    return await run_step(game_id, body.choice, options, step)


@router.post("/{game_id}/selection")
async def select_die(game_id: str, body: ChoiceRequest):
    """Select the user's die. The computer takes one of the others."""
    def options(game: DiceGame) -> list[str]:
        return [str(i) for i in game.available_dice()]

    def step(game: DiceGame, index: int) -> dict:
        game.select_die(index)
        return {"user_die": game.user_die, "computer_die": game.computer_die}

    return await run_step(game_id, body.choice, options, step)


@router.post("/{game_id}/roll")
async def roll(game_id: str, body: ChoiceRequest):
    """Add the user's number to the committed roll and reveal it."""
    def options(game: DiceGame) -> list[str]:
        return game.roll_options()

    def step(game: DiceGame, number: int) -> dict:
        return game.roll(number).to_dict()

    return await run_step(game_id, body.choice, options, step)


@router.delete("/{game_id}")
async def delete_game(game_id: str):
    """Abandon a game."""
    async with games_lock:
        games.pop(game_id, None)
    return {"ok": True}
