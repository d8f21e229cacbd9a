#!/usr/bin/env python3
"""
Demo driver: train the three preset machines on the bundled sample text
and print a few generations from each.
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Union

from markov_chain import MarkovError
from markov_config import Config, load_config
from markov_machine import (
    MarkovMachine, first_order_names, second_order_names, sentence_machine
)

logger = logging.getLogger(__name__)


class SourceUnavailable(MarkovError, OSError):
    """A sample text file could not be read."""


def load_source(path: Union[str, Path]) -> str:
    """Read one sample text file."""
    path = Path(path)
    try:
        return path.read_text(encoding='utf-8')
    except OSError as e:
        raise SourceUnavailable(f"Cannot read sample text {path}: {e}") from e


def load_or_empty(path: Union[str, Path]) -> str:
    """Read a sample file, falling back to empty text so training still runs."""
    try:
        return load_source(path)
    except SourceUnavailable as e:
        logger.error(str(e))
        return ""


def generate_many(machine: MarkovMachine, count: int) -> List[str]:
    """Run `count` independent walks; an untrained machine yields none."""
    try:
        return [machine.generate_sequence() for _ in range(count)]
    except MarkovError as e:
        logger.error(f"Generation failed for {machine.variant.name}: {e}")
        return []


def build_machines(config: Config):
    """Train the dwarf, orc and sentence machines from the configured files."""
    rng = config.make_rng()
    return [
        ("Tolkien-inspired Dwarf names",
         first_order_names(load_or_empty(config.dwarf_names_path), config, rng=rng)),
        ("Tolkien-inspired Orc names",
         second_order_names(load_or_empty(config.orc_names_path), config, rng=rng)),
        ("sentences written in the style of Charles Dickens",
         sentence_machine(load_or_empty(config.sentences_path), config, rng=rng)),
    ]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate names and sentences with Markov machines.")
    parser.add_argument('--config', type=str, default=None, help='YAML config file')
    parser.add_argument('--count', type=int, default=None, help='Generations per machine')
    parser.add_argument('--seed', type=int, default=None, help='Seed for reproducible output')
    parser.add_argument('--dwarf-names', dest='dwarf_names_path', default=None, help='Comma delimited dwarf names')
    parser.add_argument('--orc-names', dest='orc_names_path', default=None, help='Comma delimited orc names')
    parser.add_argument('--sentences', dest='sentences_path', default=None, help='Prose to learn sentences from')
    parser.add_argument('--progress', dest='show_progress', action='store_true', default=None,
                        help='Show training progress bars')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution"""
    args = parse_args(argv)

    try:
        config = load_config(
            args.config,
            generation_count=args.count,
            seed=args.seed,
            dwarf_names_path=args.dwarf_names_path,
            orc_names_path=args.orc_names_path,
            sentences_path=args.sentences_path,
            show_progress=args.show_progress,
            log_level="DEBUG" if args.verbose else None,
        )
    except ValueError as e:
        print(f"Configuration error: {e}")
        return 1

    logging.basicConfig(level=config.logging_level, format='%(asctime)s - %(levelname)s - %(message)s')

    for title, machine in build_machines(config):
        print(f"Here are your {config.generation_count} {title}:")
        for text in generate_many(machine, config.generation_count):
            print(text)
        print()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
