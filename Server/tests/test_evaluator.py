import pytest

from palabra.models.game import LetterVerdict, ScoringPolicy
from palabra.services.evaluator import evaluate, is_win, keyboard_hints

C, P, A = LetterVerdict.CORRECT, LetterVerdict.PRESENT, LetterVerdict.ABSENT


def _code(verdicts):
    return ''.join({C: 'G', P: 'Y', A: '-'}[v] for v in verdicts)


@pytest.mark.parametrize("policy", list(ScoringPolicy))
@pytest.mark.parametrize("word", ["apple", "crane", "árbol", "level"])
def test_guess_equal_to_solution_is_all_correct(word, policy):
    assert evaluate(word, word, policy) == [C] * 5


@pytest.mark.parametrize("policy", list(ScoringPolicy))
def test_disjoint_letters_are_all_absent(policy):
    assert evaluate("crest", "pluma", policy) == [A] * 5


# --- naive policy: any occurrence counts, duplicates are not capped ---
@pytest.mark.parametrize("guess,solution,expected", [
    ("raise", "crane", "YY--G"),
    ("stare", "crane", "--GYG"),
    ("belle", "level", "-GYYY"),
    ("eerie", "crane", "YYY-G"),
    ("lemon", "level", "GG---"),
])
def test_naive_scoring(guess, solution, expected):
    assert _code(evaluate(guess, solution)) == expected


# --- standard policy: presents consume unmatched solution letters ---
@pytest.mark.parametrize("guess,solution,expected", [
    ("raise", "crane", "YY--G"),
    ("belle", "level", "-GYYY"),
    ("eerie", "crane", "--Y-G"),
    ("cools", "scoop", "YYG-Y"),
])
def test_standard_scoring(guess, solution, expected):
    assert _code(evaluate(guess, solution, ScoringPolicy.STANDARD)) == expected


def test_naive_overcounts_where_standard_caps():
    naive = evaluate("eerie", "crane", "naive")
    standard = evaluate("eerie", "crane", "standard")
    assert naive.count(P) > standard.count(P)


def test_evaluate_is_case_insensitive():
    assert evaluate("CRANE", "crane") == [C] * 5


def test_length_mismatch_raises():
    with pytest.raises(ValueError):
        evaluate("cran", "crane")


def test_unknown_policy_raises():
    with pytest.raises(ValueError):
        evaluate("crane", "crane", "lenient")


def test_is_win_normalizes_case():
    assert is_win("Apple", "apple")
    assert not is_win("apply", "apple")


def test_keyboard_hints_keep_best_verdict():
    hints = keyboard_hints(["raise", "crane"], "crane")
    assert hints["r"] is C
    assert hints["a"] is C
    assert hints["i"] is A
    assert hints["s"] is A
    assert "z" not in hints
