"""
Transition tables and weighted sampling for Markov text machines.

A table maps each source state to an insertion-ordered frequency
distribution over destination states. Every trained pattern starts at
START and ends at END, so a random walk from START always has a way out.
"""

import logging
import random
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union
from collections import Counter

from tqdm import tqdm

logger = logging.getLogger(__name__)


class _Sentinel:
    """Marker state that no tokenizer can produce."""
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.name}>"


START = _Sentinel("START")
END = _Sentinel("END")

State = Union[str, _Sentinel]


class MarkovError(Exception):
    """Base class for errors raised by Markov machines."""


class UnknownStateError(MarkovError, KeyError):
    """Sampling was requested for a state the table has never seen."""

    def __init__(self, state: State):
        super().__init__(state)
        self.state = state

    def __str__(self) -> str:
        return f"No transitions recorded for unknown state {self.state!r}"


class DegenerateTableError(MarkovError):
    """A walk reached a state it cannot leave."""

    def __init__(self, state: State, message: Optional[str] = None):
        super().__init__(message or f"State {state!r} has no outgoing transitions")
        self.state = state


class TransitionTable:
    """Frequency model of state -> next state transitions."""

    def __init__(self):
        self.transitions: Dict[State, Counter] = {}

    def record(self, current: State, following: State) -> None:
        """Count one observed transition."""
        if current not in self.transitions:
            self.transitions[current] = Counter()
        self.transitions[current][following] += 1

    def add_pattern(self, symbols: Sequence[str]) -> None:
        """Record the chain START -> s0 -> ... -> sN -> END for one pattern."""
        if not symbols:
            return

        self.record(START, symbols[0])
        for current, following in zip(symbols, symbols[1:]):
            self.record(current, following)
        self.record(symbols[-1], END)

    @classmethod
    def build(cls, patterns: Iterable[str],
              decompose: Callable[[str], List[str]],
              show_progress: bool = False) -> "TransitionTable":
        """
        Build a table from training patterns.
        Args:
            patterns: Training examples (names or sentences)
            decompose: Splits one pattern into its ordered symbols
            show_progress: Display a progress bar while analyzing
        Returns:
            The aggregated transition table
        """
        table = cls()
        count = 0
        for pattern in tqdm(patterns, desc="Analyzing patterns", disable=not show_progress):
            table.add_pattern(decompose(pattern))
            count += 1

        stats = table.stats()
        logger.info(f"Trained on {count} patterns: {stats['states']} states, "
                    f"{stats['total_transitions']} transitions")
        return table

    @classmethod
    def from_snapshot(cls, snapshot: Dict[State, Dict[State, int]]) -> "TransitionTable":
        """Rebuild a live table from a snapshot."""
        table = cls()
        for state, distribution in snapshot.items():
            table.transitions[state] = Counter(distribution)
        return table

    def merge(self, other: "TransitionTable") -> "TransitionTable":
        """Return a new table holding the summed counts of both tables."""
        merged = TransitionTable.from_snapshot(self.snapshot())
        for state, distribution in other.transitions.items():
            for following, count in distribution.items():
                if state not in merged.transitions:
                    merged.transitions[state] = Counter()
                merged.transitions[state][following] += count
        return merged

    def snapshot(self) -> Dict[State, Dict[State, int]]:
        """Deep copy of the table as plain dicts."""
        return {state: dict(distribution) for state, distribution in self.transitions.items()}

    def distribution(self, state: State) -> Counter:
        if state not in self.transitions:
            raise UnknownStateError(state)
        return self.transitions[state]

    def stats(self) -> Dict:
        """Return basic statistics about the trained table."""
        if not self.transitions:
            return {"states": 0, "total_transitions": 0}

        total_transitions = sum(sum(counter.values()) for counter in self.transitions.values())
        return {
            "states": len(self.transitions),
            "total_transitions": total_transitions,
            "avg_transitions_per_state": total_transitions / len(self.transitions)
        }

    def __contains__(self, state: State) -> bool:
        return state in self.transitions

    def __len__(self) -> int:
        return len(self.transitions)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransitionTable):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    def __repr__(self) -> str:
        return f"TransitionTable(states={len(self.transitions)})"


class WeightedSampler:
    """Draws next states in proportion to their recorded counts."""

    def __init__(self, rng: Optional[random.Random] = None):
        # Anything with randrange(stop) works, e.g. random.Random(seed)
        self.rng = rng if rng is not None else random.Random()

    def next(self, table: TransitionTable, state: State) -> State:
        """Pick the state that follows `state`."""
        distribution = table.distribution(state)
        total = sum(distribution.values())
        if total <= 0:
            raise DegenerateTableError(state)

        roll = self.rng.randrange(total)

        # Walk the distribution in insertion order until the roll runs out
        for following, count in distribution.items():
            roll -= count
            if roll < 0:
                return following

        raise DegenerateTableError(state, f"Roll exceeded total weight for state {state!r}")
