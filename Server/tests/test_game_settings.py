import json

import pytest

from palabra.config.game_settings import (
    MAX_GUESSES, WORD_LENGTH, get_word_statistics, load_word_list, validate_word_list_integrity
)
from palabra.errors import WordListError


def test_constants():
    assert WORD_LENGTH == 5
    assert MAX_GUESSES == 6


def test_bundled_word_list_is_valid():
    words = load_word_list()
    assert len(words) > 100
    assert validate_word_list_integrity(words) is True
    assert "árbol" in words


def test_load_json_list(tmp_path):
    path = tmp_path / "words.json"
    path.write_text(json.dumps(["CRANE", "Árbol"]), encoding="utf-8")
    assert load_word_list(str(path)) == ["crane", "árbol"]


@pytest.mark.parametrize("content", ["[]", "{}", "{oops", '["cran"]', '["cr4ne"]', "\n\n"])
def test_bad_lists_are_fatal(tmp_path, content):
    suffix = ".txt" if content == "\n\n" else ".json"
    path = tmp_path / f"words{suffix}"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(WordListError):
        load_word_list(str(path))


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(WordListError):
        load_word_list(str(tmp_path / "nope.json"))


def test_integrity_flags_duplicates_and_case():
    with pytest.raises(WordListError, match="Duplicate"):
        validate_word_list_integrity(["crane", "crane"])
    with pytest.raises(WordListError, match="lowercase"):
        validate_word_list_integrity(["Crane"])


def test_statistics():
    stats = get_word_statistics(["árbol", "crane"])
    assert stats["total_words"] == 2
    assert stats["accented_words"] == 1
    assert get_word_statistics([]) == {"error": "Word list is empty"}
