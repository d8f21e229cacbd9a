"""
Markov machines that learn from sample text and generate look-alikes.

A machine pairs a trained TransitionTable with a Variant describing how
its text is split into symbols and glued back together. The table is
read-only once trained; each walk carries its own Cursor, so many walks
can share one machine.
"""

import logging
import random
from typing import Callable, Dict, List, Optional, Union
from dataclasses import dataclass, field
from functools import partial

from markov_chain import (
    START, END, State, TransitionTable, WeightedSampler, DegenerateTableError
)
from markov_config import Config
from markov_text import (
    split_names, chunk_pattern, split_sentences, split_words,
    CharacterAssembler, SentenceAssembler
)

logger = logging.getLogger(__name__)

Assembler = Union[CharacterAssembler, SentenceAssembler]


@dataclass(frozen=True)
class Variant:
    """How one kind of machine reads and writes text."""
    name: str
    split: Callable[[str], List[str]]
    decompose: Callable[[str], List[str]]
    assembler: Callable[[], Assembler]


def name_chain(order: int = 1) -> Variant:
    """Comma delimited names cut into `order`-character chunks."""
    if order < 1:
        raise ValueError("Order must be at least 1")
    return Variant(
        name=f"names(order={order})",
        split=split_names,
        decompose=partial(chunk_pattern, order=order),
        assembler=CharacterAssembler,
    )


def sentence_chain() -> Variant:
    """Prose cut into sentences of words and commas."""
    return Variant(
        name="sentences",
        split=split_sentences,
        decompose=split_words,
        assembler=SentenceAssembler,
    )


@dataclass
class Cursor:
    """Position of one in-progress walk."""
    state: State = START
    steps: int = 0
    path: List[State] = field(default_factory=list)

    @property
    def done(self) -> bool:
        return self.state == END

    def advance(self, state: State) -> None:
        self.state = state
        self.steps += 1
        self.path.append(state)

    def reset(self) -> bool:
        """Return to START; True once the cursor is back at the start."""
        self.state = START
        self.steps = 0
        self.path = []
        return self.state == START


class MarkovMachine:
    """Trained Markov text generator."""

    def __init__(self, text: str, variant: Variant, config: Optional[Config] = None,
                 rng: Optional[random.Random] = None):
        """
        Train a machine on raw sample text.
        Args:
            text: Sample text; empty text gives an untrained machine
            variant: Tokenizer and assembly rules to use
            config: Ingestion cap, seed and progress settings
            rng: Random source for sampling (defaults to config.make_rng())
        """
        self.config = config if config is not None else Config()
        self.variant = variant
        self.sampler = WeightedSampler(rng if rng is not None else self.config.make_rng())

        patterns = variant.split(text)
        if len(patterns) > self.config.max_samples:
            logger.warning(f"{variant.name}: ignoring {len(patterns) - self.config.max_samples} "
                           f"patterns beyond the limit of {self.config.max_samples}")
            patterns = patterns[:self.config.max_samples]

        self.pattern_count = len(patterns)
        self.table = TransitionTable.build(
            patterns, variant.decompose, show_progress=self.config.show_progress
        )

    def _check_trained(self) -> None:
        if START not in self.table:
            raise DegenerateTableError(START, f"{self.variant.name} machine has no training data")

    def begin_walk(self) -> Cursor:
        """Start a new walk at START."""
        self._check_trained()
        return Cursor()

    def step(self, cursor: Cursor) -> State:
        """Advance `cursor` by one sampled state and return it."""
        if cursor.done:
            raise ValueError("Walk already reached the end state")
        state = self.sampler.next(self.table, cursor.state)
        cursor.advance(state)
        return state

    def generate_sequence(self, cursor: Optional[Cursor] = None) -> str:
        """
        Walk from START until END and render the visited states as text.
        Args:
            cursor: Optional caller-owned cursor; it is reset to START afterwards
        Returns:
            Generated name or sentence
        """
        self._check_trained()
        if cursor is None:
            cursor = Cursor()
        else:
            cursor.reset()

        assembler = self.variant.assembler()
        try:
            while True:
                state = self.step(cursor)
                if state is END:
                    break
                assembler.append(state)
            logger.debug(f"{self.variant.name}: walk finished after {cursor.steps} steps")
        finally:
            cursor.reset()
        return assembler.finish()

    def snapshot(self) -> Dict[State, Dict[State, int]]:
        """Independent copy of the trained transitions."""
        return self.table.snapshot()

    def stats(self) -> Dict:
        stats = self.table.stats()
        stats["patterns"] = self.pattern_count
        return stats

    def __repr__(self) -> str:
        return f"MarkovMachine({self.variant.name}, states={len(self.table)})"


def first_order_names(text: str, config: Optional[Config] = None, **kwargs) -> MarkovMachine:
    """Name machine with single-character states."""
    config = config if config is not None else Config()
    return MarkovMachine(text, name_chain(config.name_order), config, **kwargs)


def second_order_names(text: str, config: Optional[Config] = None, **kwargs) -> MarkovMachine:
    """Name machine with two-character states."""
    config = config if config is not None else Config()
    return MarkovMachine(text, name_chain(config.second_name_order), config, **kwargs)


def sentence_machine(text: str, config: Optional[Config] = None, **kwargs) -> MarkovMachine:
    """Word level machine for prose."""
    return MarkovMachine(text, sentence_chain(), config, **kwargs)
