"""
Configuration for Markov text machines and the demo driver.
"""

import logging
import random
from pathlib import Path
from typing import Any, Dict, Optional, Union
from dataclasses import dataclass, fields

import yaml

DATA_DIR = Path(__file__).parent / "data"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# key: (type, check)
SCHEMA = {
    'max_samples': (int, lambda x: x >= 1),
    'name_order': (int, lambda x: x >= 1),
    'second_name_order': (int, lambda x: x >= 1),
    'seed': ((int, type(None)), lambda x: True),
    'generation_count': (int, lambda x: x >= 0),
    'show_progress': (bool, lambda x: True),
    'log_level': (str, lambda x: x.upper() in LOG_LEVELS),
    'dwarf_names_path': (str, lambda x: bool(x)),
    'orc_names_path': (str, lambda x: bool(x)),
    'sentences_path': (str, lambda x: bool(x)),
}


@dataclass
class Config:
    """Training limits, seeding and sample sources"""

    # Training
    max_samples: int = 50000
    name_order: int = 1
    second_name_order: int = 2

    # Generation
    seed: Optional[int] = None
    generation_count: int = 5

    # Logging
    show_progress: bool = False
    log_level: str = "INFO"

    # Sample text
    dwarf_names_path: str = str(DATA_DIR / "dwarf_names.txt")
    orc_names_path: str = str(DATA_DIR / "orc_names.txt")
    sentences_path: str = str(DATA_DIR / "a_tale_of_two_cities.txt")

    def __post_init__(self):
        validate_config({f.name: getattr(self, f.name) for f in fields(self)})
        self.log_level = self.log_level.upper()

    def make_rng(self) -> random.Random:
        """Random source for sampling, seeded when a seed is set."""
        return random.Random(self.seed)

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Check keys, types and values against SCHEMA."""
    for key, value in config.items():
        if key not in SCHEMA:
            raise ValueError(f"Unknown configuration key: {key}")
        type_, check = SCHEMA[key]
        # bool is an int subclass; only accept it where a bool is expected
        if isinstance(value, bool) and type_ is not bool:
            raise ValueError(f"Wrong type for {key}: expected {type_}, got {type(value)}")
        if not isinstance(value, type_):
            raise ValueError(f"Wrong type for {key}: expected {type_}, got {type(value)}")
        if not check(value):
            raise ValueError(f"Invalid value for {key}: {value}")
    return config


def load_config(path: Optional[Union[str, Path]] = None, **overrides) -> Config:
    """
    Load configuration from a YAML file.
    Args:
        path: YAML file with a mapping of config keys; defaults are used when missing
        overrides: Values that take precedence over the file
    Returns:
        Validated Config
    """
    values: Dict[str, Any] = {}
    if path is not None:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except FileNotFoundError:
            logging.getLogger(__name__).warning(f"Config file {path} not found, using defaults")
            loaded = None

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        values.update(validate_config(loaded))

    values.update({key: value for key, value in overrides.items() if value is not None})
    return Config(**values)
