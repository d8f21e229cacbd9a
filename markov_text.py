"""
Tokenizers and text assembly for Markov text machines.

Names are split on commas and cut into fixed-width character chunks.
Sentences are split on terminal punctuation and cut into words, with
commas kept as words of their own.
"""

import re
from typing import List

NAME_DELIMITER = re.compile(r",\s*")
SENTENCE_DELIMITER = re.compile(r"[.!?]")


def split_names(text: str) -> List[str]:
    """Split comma delimited names: 'tom, dick, harry'."""
    text = text.strip()
    if not text:
        return []
    return NAME_DELIMITER.split(text)


def chunk_pattern(pattern: str, order: int) -> List[str]:
    """
    Cut a pattern into chunks of `order` characters.
    The last chunk keeps whatever is left and may be shorter.
    """
    if order < 1:
        raise ValueError("Order must be at least 1")
    return [pattern[i:i + order] for i in range(0, len(pattern), order)]


def split_sentences(text: str) -> List[str]:
    """Split prose into raw sentences on '.', '!' and '?'."""
    sentences = SENTENCE_DELIMITER.split(text)
    # Text after the final terminator is not a sentence
    if sentences and not sentences[-1]:
        sentences.pop()
    return sentences


def normalize_sentence(sentence: str) -> str:
    """Drop line breaks and detach commas from the preceding word."""
    for unwanted in ("\n", "\r"):
        sentence = sentence.replace(unwanted, "")
    return sentence.replace(",", " ,")


def split_words(sentence: str) -> List[str]:
    """Cut a sentence into word symbols, commas included."""
    return normalize_sentence(sentence).split()


class CharacterAssembler:
    """Glues name chunks back together with no separator."""

    def __init__(self):
        self.parts: List[str] = []

    def append(self, symbol: str) -> None:
        self.parts.append(symbol)

    def finish(self) -> str:
        return "".join(self.parts)


class SentenceAssembler:
    """
    Joins words with spaces.

    A comma replaces the space left by the previous word, so the result
    reads 'word, word'. Finishing swaps the final space for a period.
    """

    def __init__(self):
        self.text = ""

    def append(self, symbol: str) -> None:
        if symbol.startswith(","):
            self.text = self.text[:-1] + symbol + " "
        else:
            self.text += symbol + " "

    def finish(self) -> str:
        text = self.text
        if text.endswith(" "):
            text = text[:-1]
        text += "."
        if text.startswith(" "):
            text = text[1:]
        return text
