import pytest

from markov_text import (
    split_names, chunk_pattern, split_sentences, normalize_sentence, split_words,
    CharacterAssembler, SentenceAssembler
)


def test_split_names():
    assert split_names("tom, dick, harry, phil") == ["tom", "dick", "harry", "phil"]
    assert split_names("tom,dick,\nharry\n") == ["tom", "dick", "harry"]
    assert split_names("") == []
    assert split_names("  \n") == []


@pytest.mark.parametrize("pattern, order, expected", [
    ("Thorin", 1, ["T", "h", "o", "r", "i", "n"]),
    ("Thorin", 2, ["Th", "or", "in"]),
    ("Azog", 3, ["Azo", "g"]),
    ("Oin", 5, ["Oin"]),
    ("", 2, []),
])
def test_chunk_pattern(pattern, order, expected):
    assert chunk_pattern(pattern, order) == expected


def test_chunk_pattern_rejects_bad_order():
    with pytest.raises(ValueError):
        chunk_pattern("abc", 0)


def test_split_sentences():
    assert split_sentences("Hi, Bob. Go now.") == ["Hi, Bob", " Go now"]
    assert split_sentences("Stop! Who goes? Me") == ["Stop", " Who goes", " Me"]
    assert split_sentences("") == []


def test_normalize_sentence():
    assert normalize_sentence("Hi, Bob") == "Hi , Bob"
    assert normalize_sentence("line\r\nbreak") == "linebreak"


def test_split_words():
    assert split_words("Hi, Bob") == ["Hi", ",", "Bob"]
    assert split_words(" Go now") == ["Go", "now"]
    assert split_words("   ") == []


def test_character_assembler():
    assembler = CharacterAssembler()
    for chunk in ["Th", "or", "in"]:
        assembler.append(chunk)
    assert assembler.finish() == "Thorin"
    assert CharacterAssembler().finish() == ""


def test_sentence_assembler_attaches_commas():
    assembler = SentenceAssembler()
    for word in ["Hi", ",", "Bob"]:
        assembler.append(word)
    assert assembler.finish() == "Hi, Bob."


def test_sentence_assembler_plain_words():
    assembler = SentenceAssembler()
    for word in ["It", "was", "the", "best", "of", "times"]:
        assembler.append(word)
    assert assembler.finish() == "It was the best of times."


def test_sentence_assembler_trims_leading_space():
    assembler = SentenceAssembler()
    assembler.append("")
    assembler.append("Go")
    assert assembler.finish() == "Go."
