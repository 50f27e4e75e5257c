import re

import pytest

from parser import PATTERNS, TokenStream, tokenize


def values(text):
    return [t[0] for t in tokenize(text)]


def test_punctuation_splits_adjacent_words():
    assert values("move(3);turnL;") == ["move", "(", "3", ")", ";", "turnL", ";"]


def test_whitespace_and_newlines_are_separators():
    assert values("  loop\n{\tmove ;\n}\n") == ["loop", "{", "move", ";", "}"]


def test_other_characters_stay_in_one_word():
    assert values("a-b+c move;x") == ["a-b+c", "move", ";", "x"]


def test_empty_text_has_no_tokens():
    assert tokenize("") == []
    assert tokenize(" \n\n ") == []


def test_tokens_record_line_and_column():
    tokens = tokenize("move;\n  turnL;")
    assert tokens[0] == ("move", 1, 0)
    assert tokens[2] == ("turnL", 2, 2)
    assert tokens[3] == (";", 2, 7)


def test_stream_peek_next_and_reset():
    s = TokenStream.from_text("move ( 2 ) ;")
    assert s.peek() == "move"
    assert s.has_next("move")
    assert not s.has_next("(")
    assert s.has_next(PATTERNS['ACTION'])
    assert s.next() == "move"
    assert s.upcoming(2) == ["(", "2"]
    s.reset()
    assert s.next() == "move"


def test_exhausted_stream_is_not_an_error():
    s = TokenStream.from_text("wait")
    s.next()
    assert not s.has_next()
    assert not s.has_next(PATTERNS['ACTION'])
    assert s.peek() is None
    assert s.upcoming(5) == []


def test_patterns_match_whole_tokens_only():
    s = TokenStream.from_text("moved")
    assert not s.has_next(PATTERNS['ACTION'])
    s = TokenStream.from_text("whilex")
    assert not s.has_next(PATTERNS['WHILE'])


@pytest.mark.parametrize("text", ["0", "7", "-3", "120", "-0"])
def test_number_pattern_accepts(text):
    assert PATTERNS['NUMBER'].fullmatch(text)


@pytest.mark.parametrize("text", ["01", "-", "3a", "+4", "1.5"])
def test_number_pattern_rejects(text):
    assert not PATTERNS['NUMBER'].fullmatch(text)


def test_keyword_tables():
    assert all(PATTERNS['SENSOR'].fullmatch(w) for w in
               ["fuelLeft", "oppLR", "oppFB", "numBarrels", "barrelLR", "barrelFB", "wallDist"])
    assert all(PATTERNS['RELOP'].fullmatch(w) for w in ["lt", "gt", "eq"])
    assert all(PATTERNS['OP'].fullmatch(w) for w in ["add", "sub", "mul", "div"])
    assert all(PATTERNS['CONDOP'].fullmatch(w) for w in ["and", "or", "not"])
    assert isinstance(PATTERNS['LOOP'], re.Pattern)
