"""
Guess Evaluator

Scores a guess against the solution letter by letter.

Two policies are available. NAIVE marks a letter PRESENT whenever it occurs
anywhere in the solution, so a guess with repeated letters can collect more
PRESENT marks than the solution has copies of that letter. STANDARD is the
usual Wordle two-pass algorithm that consumes solution letters as they are
matched. NAIVE is the default because it is what the board has always shown.
"""

from typing import Dict, Iterable, List, Optional, Union

from ..models.game import LetterVerdict, ScoringPolicy

_RANK = {LetterVerdict.ABSENT: 0, LetterVerdict.PRESENT: 1, LetterVerdict.CORRECT: 2}


def _evaluate_naive(guess: str, solution: str) -> List[LetterVerdict]:
    result = []
    for g, s in zip(guess, solution):
        if g == s:
            result.append(LetterVerdict.CORRECT)
        elif g in solution:
            result.append(LetterVerdict.PRESENT)
        else:
            result.append(LetterVerdict.ABSENT)
    return result


def _evaluate_standard(guess: str, solution: str) -> List[LetterVerdict]:
    result: List[Optional[LetterVerdict]] = []
    solution_chars: List[Optional[str]] = list(solution)

    # First pass: exact position matches, consumed so they are not counted twice
    for i, letter in enumerate(guess):
        if letter == solution_chars[i]:
            result.append(LetterVerdict.CORRECT)
            solution_chars[i] = None
        else:
            result.append(None)

    # Second pass: present letters take the first unconsumed occurrence
    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        if letter in solution_chars:
            result[i] = LetterVerdict.PRESENT
            solution_chars[solution_chars.index(letter)] = None
        else:
            result[i] = LetterVerdict.ABSENT

    return [verdict for verdict in result if verdict is not None]


def evaluate(guess: str, solution: str,
             policy: Union[ScoringPolicy, str] = ScoringPolicy.NAIVE) -> List[LetterVerdict]:
    """
    Compute the verdict for each position of `guess`.

    Raises:
        ValueError: If guess and solution differ in length or the policy is unknown
    """
    policy = ScoringPolicy(policy)
    guess, solution = guess.lower(), solution.lower()
    if len(guess) != len(solution):
        raise ValueError("Guess length must match the solution length.")

    if policy is ScoringPolicy.STANDARD:
        return _evaluate_standard(guess, solution)
    return _evaluate_naive(guess, solution)


def is_win(guess: str, solution: str) -> bool:
    return guess.lower() == solution.lower()


def keyboard_hints(guesses: Iterable[str], solution: str,
                   policy: Union[ScoringPolicy, str] = ScoringPolicy.NAIVE) -> Dict[str, LetterVerdict]:
    """
    Best verdict seen per letter across all guesses.

    Status only moves up: ABSENT -> PRESENT -> CORRECT.
    """
    hints: Dict[str, LetterVerdict] = {}
    for guess in guesses:
        for letter, verdict in zip(guess.lower(), evaluate(guess, solution, policy)):
            current = hints.get(letter)
            if current is None or _RANK[verdict] > _RANK[current]:
                hints[letter] = verdict
    return hints
