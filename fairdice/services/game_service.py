"""Game session service for FairDice.

This module handles the game session logic including:
- Deciding the first move with a committed coin flip
- Die selection, where a die taken by one player is closed to the other
- Fair rolls: the computer commits, the user adds a number, both are combined
- Outcome calculation

Nothing here reads input or writes output; callers drive the game one step
at a time and render the returned results.
"""

import logging
import secrets
from dataclasses import dataclass, field
from typing import Callable, Optional

from fairdice.config import settings
from fairdice.constants import GamePhase, Outcome, Player
from fairdice.exceptions import DieUnavailableError, GamePhaseError, InvalidInputError
from fairdice.models.commitment import Commitment, PublishedCommitment, RevealResult
from fairdice.models.dice import DiceSet
from fairdice.models.probability import ProbabilityTable
from fairdice.services.probability_service import ProbabilityEstimator
from fairdice.services.protocol_service import FairRandomProtocol
from fairdice.utils.choices import numbered_options
from fairdice.utils.random_source import RandomSource, default_source

log = logging.getLogger(__name__)

CombineRule = Callable[[int, int, int], int]


def modular_sum(committed: int, contributed: int, modulus: int) -> int:
    """Default rule for combining the committed value with the user's number."""
    return (committed + contributed) % modulus


@dataclass(frozen=True)
class FirstMoveResult:
    guess: int
    reveal: RevealResult
    first_player: Player

    def to_dict(self) -> dict:
        return {"guess": self.guess, "reveal": self.reveal.to_dict(), "first_player": self.first_player}


@dataclass(frozen=True)
class RollResult:
    player: Player
    die: int
    reveal: RevealResult
    contributed: int
    modulus: int
    face_index: int
    face: int

    def to_dict(self) -> dict:
        return {
            "player": self.player,
            "die": self.die,
            "reveal": self.reveal.to_dict(),
            "contributed": self.contributed,
            "modulus": self.modulus,
            "face_index": self.face_index,
            "face": self.face,
        }


@dataclass
class RollRound:
    """A roll in progress: the commitment is published, the reveal is pending."""
    player: Player
    die: int
    commitment: Commitment


@dataclass
class GameResult:
    user_roll: RollResult
    computer_roll: RollResult
    winner: Outcome
    verified: bool = field(init=False)

    def __post_init__(self):
        self.verified = self.user_roll.reveal.verified and self.computer_roll.reveal.verified

    def to_dict(self) -> dict:
        return {
            "user_roll": self.user_roll.to_dict(),
            "computer_roll": self.computer_roll.to_dict(),
            "winner": self.winner,
            "verified": self.verified,
        }


class DiceGame:
    """One game between the user and the computer over a set of dice."""

    def __init__(
        self,
        dice: DiceSet,
        protocol: Optional[FairRandomProtocol] = None,
        estimator: Optional[ProbabilityEstimator] = None,
        source: Optional[RandomSource] = None,
        roll_modulus: Optional[int] = None,
        combine: CombineRule = modular_sum,
        game_id: Optional[str] = None,
    ):
        self.game_id = game_id or secrets.token_hex(8)
        self.dice = dice
        self.source = source or default_source
        self.protocol = protocol or FairRandomProtocol(self.source)
        self.estimator = estimator or ProbabilityEstimator(source=self.source)
        self.roll_modulus = roll_modulus if roll_modulus is not None else settings.roll_modulus
        self.combine = combine

        self.phase: GamePhase = "first_move"
        self.first_move: Optional[Commitment] = None
        self.first_player: Optional[Player] = None
        self.user_die: Optional[int] = None
        self.computer_die: Optional[int] = None
        self.current_roll: Optional[RollRound] = None
        self.rolls: dict[str, RollResult] = {}
        self.result: Optional[GameResult] = None

    # ---------------------------------------------------------------- helpers

    def _require(self, phase: GamePhase):
        if self.phase != phase:
            raise GamePhaseError(f"expected phase {phase!r}, game is in {self.phase!r}")

    def _taken(self) -> list[int]:
        return [i for i in (self.user_die, self.computer_die) if i is not None]

    def available_dice(self) -> list[int]:
        """Indices of dice nobody has taken yet."""
        return [i for i, _ in self.dice.remaining(self._taken())]

    def help(self) -> ProbabilityTable:
        """Win probabilities for every pair of dice in this game."""
        return self.estimator.estimate_all(self.dice)

    # ------------------------------------------------------------- first move

    def start_first_move(self) -> PublishedCommitment:
        """Commit to the coin that decides who picks a die first."""
        self._require("first_move")
        if self.first_move is None:
            self.first_move = self.protocol.create_commitment(settings.first_move_range)
            log.info("game %s: first move committed (proof=%s)", self.game_id, self.first_move.proof)
        return self.first_move.publish()

    def first_move_options(self) -> list[str]:
        return numbered_options(settings.first_move_range)

    def resolve_first_move(self, guess: int) -> FirstMoveResult:
        """Reveal the coin. A correct guess lets the user choose first."""
        self._require("first_move")
        if self.first_move is None or not self.first_move.published:
            raise GamePhaseError("first move has not been committed")
        if guess not in range(self.first_move.range):
            raise InvalidInputError(str(guess), self.first_move_options())

        reveal = self.protocol.reveal(self.first_move)
        self.first_player = "user" if reveal.value == guess else "computer"
        self.phase = "selection"
        log.info("game %s: %s moves first", self.game_id, self.first_player)

        if self.first_player == "computer":
            self.computer_select_die()
        return FirstMoveResult(guess=guess, reveal=reveal, first_player=self.first_player)

    # -------------------------------------------------------------- selection

    def computer_select_die(self) -> int:
        """Pick a random die among the ones still available."""
        self._require("selection")
        if self.computer_die is not None:
            raise GamePhaseError("computer has already selected a die")
        available = self.available_dice()
        self.computer_die = available[self.source.randbelow(len(available))]
        log.info("game %s: computer selected die %d", self.game_id, self.computer_die)
        self._after_selection()
        return self.computer_die

    def select_die(self, index: int) -> int:
        """Record the user's die. Dice taken by the computer are refused."""
        self._require("selection")
        if self.user_die is not None:
            raise GamePhaseError("user has already selected a die")
        if index not in self.available_dice():
            raise DieUnavailableError(f"die {index} is not available")
        self.user_die = index
        log.info("game %s: user selected die %d", self.game_id, index)
        if self.computer_die is None:
            self.computer_select_die()
        else:
            self._after_selection()
        return index

    def _after_selection(self):
        if self.user_die is not None and self.computer_die is not None:
            self.phase = "roll"
            self._start_roll(self.first_player or "user")

    # ------------------------------------------------------------------ rolls

    def _die_of(self, player: Player) -> int:
        return self.user_die if player == "user" else self.computer_die

    def _modulus_for(self, die: int) -> int:
        return self.roll_modulus or len(self.dice[die])

    def _start_roll(self, player: Player):
        die = self._die_of(player)
        commitment = self.protocol.create_commitment(self._modulus_for(die))
        commitment.publish()
        self.current_roll = RollRound(player=player, die=die, commitment=commitment)
        log.info("game %s: %s roll committed (proof=%s)", self.game_id, player, commitment.proof)

    def roll_commitment(self) -> PublishedCommitment:
        """The published commitment for the roll in progress."""
        self._require("roll")
        c = self.current_roll.commitment
        return PublishedCommitment(proof=c.proof, range=c.range)

    def roll_options(self) -> list[str]:
        self._require("roll")
        return numbered_options(self.current_roll.commitment.range)

    def roll(self, contributed: int) -> RollResult:
        """Combine the user's number with the committed value and roll."""
        self._require("roll")
        current = self.current_roll
        modulus = current.commitment.range
        if contributed not in range(modulus):
            raise InvalidInputError(str(contributed), numbered_options(modulus))

        reveal = self.protocol.reveal(current.commitment)
        die = self.dice[current.die]
        face_index = self.combine(reveal.value, contributed, modulus) % len(die)
        result = RollResult(
            player=current.player,
            die=current.die,
            reveal=reveal,
            contributed=contributed,
            modulus=modulus,
            face_index=face_index,
            face=die.faces[face_index],
        )
        self.rolls[current.player] = result
        log.info("game %s: %s rolled %d", self.game_id, current.player, result.face)

        if len(self.rolls) == 2:
            self.current_roll = None
            self._finish()
        else:
            self._start_roll("computer" if current.player == "user" else "user")
        return result

    def _finish(self):
        user, computer = self.rolls["user"], self.rolls["computer"]
        if user.face > computer.face:
            winner: Outcome = "user"
        elif user.face < computer.face:
            winner = "computer"
        else:
            winner = "tie"
        self.result = GameResult(user_roll=user, computer_roll=computer, winner=winner)
        self.phase = "finished"
        log.info("game %s finished: %s", self.game_id, winner)

    # ------------------------------------------------------------------ state

    def state(self) -> dict:
        """Public view of the game. Secrets appear only once revealed."""
        commitment = None
        if self.phase == "first_move" and self.first_move is not None:
            commitment = {"proof": self.first_move.proof, "range": self.first_move.range}
        elif self.phase == "roll":
            commitment = self.roll_commitment().to_dict()
        return {
            "game_id": self.game_id,
            "phase": self.phase,
            "dice": [list(d.faces) for d in self.dice],
            "first_player": self.first_player,
            "user_die": self.user_die,
            "computer_die": self.computer_die,
            "available_dice": self.available_dice(),
            "commitment": commitment,
            "rolling": self.current_roll.player if self.current_roll else None,
            "rolls": {p: r.to_dict() for p, r in self.rolls.items()},
            "result": self.result.to_dict() if self.result else None,
        }
