"""
Terminal client.

Line based: letters typed on a line are added one by one, '<' removes the
last letter, and the guess is submitted at the end of the line once it has
WORD_LENGTH letters. ':q' quits.
"""

import argparse
import logging
import sys
import time
from typing import Callable, Dict, Iterable, List, Optional

from ..config.app_config import Config
from ..config.game_settings import ALPHABET, MAX_GUESSES, WORD_LENGTH
from ..errors import ApiError, PalabraError
from ..models.game import Action, LetterVerdict, ScoringPolicy, Status
from ..services.persistence import JsonFileStateGateway, MongoStateGateway, PersistenceGateway
from ..services.session import GameSession
from ..services.word_service import WordService
from .api_client import WordleApiClient

logger = logging.getLogger(__name__)

COLORS = {
    LetterVerdict.CORRECT: '\033[92m',
    LetterVerdict.PRESENT: '\033[93m',
    LetterVerdict.ABSENT: '\033[90m',
}
RESET = '\033[0m'

KEYBOARD_ROWS = ['áéíóúü', 'qwertyuiop', 'asdfghjklñ', 'zxcvbnm']

FETCH_ATTEMPTS = 3


def colorize(word: str, verdicts: Iterable[LetterVerdict]) -> str:
    return ''.join(f"{COLORS[v]}{ch.upper()}{RESET}" for ch, v in zip(word, verdicts))


def render_board(session: GameSession) -> str:
    state = session.state
    lines = []
    for guess, verdicts in zip(state.guesses, session.verdicts()):
        lines.append(colorize(guess, verdicts))
    if state.status is Status.PLAYING and len(lines) < MAX_GUESSES:
        lines.append(state.input.upper().ljust(WORD_LENGTH, '_'))
    while len(lines) < MAX_GUESSES:
        lines.append('.' * WORD_LENGTH)
    return '\n'.join(lines)


def render_keyboard(hints: Dict[str, LetterVerdict]) -> str:
    rows = []
    for row in KEYBOARD_ROWS:
        keys = []
        for letter in row:
            verdict = hints.get(letter)
            keys.append(f"{COLORS[verdict]}{letter.upper()}{RESET}" if verdict else letter.upper())
        rows.append(' '.join(keys))
    return '\n'.join(rows)


def apply_line(session: GameSession, line: str,
               check_guess: Optional[Callable[[str], bool]] = None) -> None:
    """Translate one typed line into actions and submit when the input is full."""
    for char in line.strip():
        if char == '<':
            session.dispatch(Action.remove_letter())
        elif char.lower() in ALPHABET:
            session.dispatch(Action.add_letter(char.lower()))
    if len(session.state.input) == WORD_LENGTH:
        before = len(session.state.guesses)
        session.submit(check_guess)
        if len(session.state.guesses) == before:
            print("Not in the word list.")


def fetch_with_retry(fetch: Callable[[], str], attempts: int = FETCH_ATTEMPTS,
                     delay: float = 1.0) -> Callable[[], str]:
    """Wrap fetch so transient ApiErrors are retried with a growing delay."""
    def wrapped():
        for attempt in range(1, attempts + 1):
            try:
                return fetch()
            except ApiError as e:
                if attempt == attempts:
                    raise
                logger.warning("Fetching today's word failed (attempt %d/%d): %s", attempt, attempts, e)
                time.sleep(delay * attempt)
    return wrapped


def build_gateway(args) -> PersistenceGateway:
    if args.mongo_uri:
        return MongoStateGateway.from_uri(args.mongo_uri, Config.MONGO_DB_NAME, namespace=args.player)
    return JsonFileStateGateway(args.state_file)


def parse_args(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Play today's word in the terminal.")
    ap.add_argument('--base-url', default=Config.API_BASE_URL, help='game server URL')
    ap.add_argument('--local', action='store_true',
                    help='pick the word and check guesses locally instead of asking the server')
    ap.add_argument('--word-list', default=Config.WORD_LIST_PATH, help='word list for --local')
    ap.add_argument('--state-file', default=Config.STATE_FILE, help='where progress is saved')
    ap.add_argument('--mongo-uri', default=Config.MONGO_URI, help='save progress in MongoDB instead')
    ap.add_argument('--player', default='default', help='player name for shared storage')
    ap.add_argument('--policy', default=Config.SCORING_POLICY,
                    choices=[p.value for p in ScoringPolicy], help='scoring of repeated letters')
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=Config.LOG_LEVEL, format='%(levelname)s: %(message)s')

    try:
        session = GameSession(build_gateway(args), policy=args.policy)
        if args.local:
            words = WordService.from_path(args.word_list)
            fetch_word, check_guess = words.get_daily_word, words.is_valid_word
        else:
            client = WordleApiClient(args.base_url)
            fetch_word, check_guess = fetch_with_retry(client.fetch_daily_word), client.check_guess
        print("Loading today's word...")
        session.load_word(fetch_word)
    except PalabraError as e:
        print(f"Cannot start the game: {e}", file=sys.stderr)
        return 1

    print(f"Guess the {WORD_LENGTH}-letter word in {MAX_GUESSES} tries. '<' deletes, ':q' quits.")
    while not session.state.is_over:
        print(render_board(session))
        print()
        print(render_keyboard(session.letter_hints()))
        try:
            line = input('>> ')
        except EOFError:
            break
        if line.strip() == ':q':
            break
        try:
            if session.rollover().word is None:
                print("A new day has started, loading the new word...")
                session.load_word(fetch_word)
                continue
            apply_line(session, line, check_guess)
        except ApiError as e:
            print(f"Could not reach the server, try again: {e}")

    print(render_board(session))
    if session.state.status is Status.WON:
        print(f"You got it in {len(session.state.guesses)}!")
    elif session.state.status is Status.LOST:
        print(f"Out of guesses. The word was {session.state.word.upper()}.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
