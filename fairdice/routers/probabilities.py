"""Probability table router for FairDice."""

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool

from fairdice.exceptions import InsufficientDistributionsError, InvalidDiceError
from fairdice.models.requests import DiceSetRequest
from fairdice.models.responses import ProbabilityTableResponse
from fairdice.services.table_service import build_dice_set, table_payload

router = APIRouter(prefix="/probabilities", tags=["probabilities"])


@router.post("", response_model=ProbabilityTableResponse)
async def probabilities(body: DiceSetRequest):
    """Estimate how often each die beats each other die.

    Cell (i, j) of the matrix is P(die i rolls higher than die j); the
    diagonal is empty.
    """
    try:
        dice = build_dice_set(body.dice)
    except (InvalidDiceError, InsufficientDistributionsError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return await run_in_threadpool(table_payload, dice)
