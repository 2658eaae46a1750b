"""
Game Session

Client-side owner of the day's GameState. Routes every action through the
reducer, persists each state change, and guards the remote guess check so
only one check is in flight at a time.
"""

import datetime
import logging
from typing import Callable, Dict, Optional, Set, Union

from ..config.game_settings import WORD_LENGTH
from ..errors import PersistenceError
from ..models.game import Action, GameState, LetterVerdict, ScoringPolicy, Status
from .evaluator import evaluate, keyboard_hints
from .persistence import PersistenceGateway, restore_state, save_state
from .state_machine import reduce
from .word_service import is_well_formed_guess

logger = logging.getLogger(__name__)


class GameSession:
    """
    One player's game for one calendar day.

    Args:
        gateway: Storage for the serialized state
        today: Day being played; defaults to the local date
        policy: Scoring policy used for board and keyboard colouring
    """

    def __init__(self, gateway: PersistenceGateway,
                 today: Optional[datetime.date] = None,
                 policy: Union[ScoringPolicy, str] = ScoringPolicy.NAIVE):
        self.gateway = gateway
        self.today = today or datetime.date.today()
        self.policy = ScoringPolicy(policy)
        self.state = restore_state(gateway, self.today)
        self._pending_guess: Optional[str] = None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def dispatch(self, action: Action) -> GameState:
        """Apply an action; persist the whole state if it changed."""
        new_state = reduce(self.state, action)
        if new_state is self.state:
            return self.state

        previous, self.state = self.state, new_state
        self._persist()
        if new_state.status is not previous.status:
            self._log_outcome(new_state)
        return self.state

    def _persist(self) -> None:
        try:
            save_state(self.gateway, self.state)
        except PersistenceError as e:
            # In-memory state stays authoritative; the next change retries the write
            logger.error("Failed to persist game state for %s: %s", self.today, e)

    def _log_outcome(self, state: GameState) -> None:
        if state.status is Status.WON:
            logger.info("Game won on %s in %d guesses", self.today, len(state.guesses))
        elif state.status is Status.LOST:
            logger.info("Game lost on %s, word was %r", self.today, state.word)

    def rollover(self, today: Optional[datetime.date] = None) -> GameState:
        """Start over if the calendar day changed since the session began."""
        today = today or datetime.date.today()
        if today != self.today:
            self.today = today
            self._pending_guess = None
            self.state = restore_state(self.gateway, today)
        return self.state

    # ------------------------------------------------------------------
    # Word of the day
    # ------------------------------------------------------------------

    def load_word(self, fetch_word: Callable[[], str]) -> GameState:
        """Resolve today's word once; errors from fetch_word propagate."""
        if self.state.word is not None:
            return self.state
        return self.dispatch(Action.set_word(fetch_word()))

    # ------------------------------------------------------------------
    # Guess submission
    # ------------------------------------------------------------------

    @property
    def check_in_flight(self) -> bool:
        return self._pending_guess is not None

    def _can_submit(self) -> bool:
        state = self.state
        return (state.word is not None
                and not state.is_over
                and len(state.input) == WORD_LENGTH
                and is_well_formed_guess(state.input))

    def begin_submission(self) -> Optional[str]:
        """
        Claim the submission slot for the current input.

        Returns the guess to check, or None if the input is not submittable
        or another check is still outstanding.
        """
        if self._pending_guess is not None:
            logger.debug("Dropping submission, check for %r still in flight", self._pending_guess)
            return None
        if not self._can_submit():
            return None
        self._pending_guess = self.state.input
        return self._pending_guess

    def resolve_submission(self, accepted: bool) -> GameState:
        """Apply the result of the outstanding check."""
        pending, self._pending_guess = self._pending_guess, None
        if pending is None or pending != self.state.input:
            logger.debug("Ignoring stale check result for %r", pending)
            return self.state
        if accepted:
            return self.dispatch(Action.submit_guess())
        return self.dispatch(Action.clear_input())

    def cancel_submission(self) -> None:
        """Release the submission slot without touching the state."""
        self._pending_guess = None

    def submit(self, check_guess: Optional[Callable[[str], bool]] = None) -> GameState:
        """
        Submit the current input.

        Without a checker the guess is applied locally. With one, the guess
        is accepted only if check_guess returns True and cleared otherwise.
        A checker exception releases the slot and propagates.
        """
        if check_guess is None:
            if self._pending_guess is not None or not self._can_submit():
                return self.state
            return self.dispatch(Action.submit_guess())

        guess = self.begin_submission()
        if guess is None:
            return self.state
        try:
            accepted = check_guess(guess)
        except Exception:
            self.cancel_submission()
            raise
        return self.resolve_submission(accepted)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def verdicts(self):
        """Verdict rows for the submitted guesses."""
        if self.state.word is None:
            return []
        return [evaluate(guess, self.state.word, self.policy) for guess in self.state.guesses]

    @property
    def used_letters(self) -> Set[str]:
        return set(''.join(self.state.guesses))

    def letter_hints(self) -> Dict[str, LetterVerdict]:
        if self.state.word is None:
            return {}
        return keyboard_hints(self.state.guesses, self.state.word, self.policy)
