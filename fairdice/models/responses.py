"""Pydantic response models for FairDice API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    env: str
    version: str


class CommitmentResponse(BaseModel):
    """A published commitment: the proof and the range of the hidden value."""
    proof: str
    range: int


class ProbabilityTableResponse(BaseModel):
    """Pairwise win probabilities with a display-ready rendering."""
    size: int
    trials: int
    precision: int
    entries: List[Dict[str, Any]]
    matrix: List[List[Optional[float]]]
    headers: List[str]
    rows: List[List[str]]


class GameStateResponse(BaseModel):
    """Public state of a game."""
    game_id: str
    phase: str
    dice: List[List[int]]
    first_player: Optional[str] = None
    user_die: Optional[int] = None
    computer_die: Optional[int] = None
    available_dice: List[int]
    commitment: Optional[CommitmentResponse] = None
    rolling: Optional[str] = None
    rolls: Dict[str, Dict[str, Any]]
    result: Optional[Dict[str, Any]] = None

