"""Command-line configuration for the branch simulators."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from tracesim.btb import BranchTargetBuffer, BTBConfig
from tracesim.predictor import BranchPredictor


@dataclass
class SimConfig:
    """Options gathered from the command line; ``None`` means not given."""

    simulator_name: str = ""
    set: int | None = None
    associativity: int | None = None
    block: int | None = None
    trace_file: str = ""
    pht_size: int | None = None


_INT_OPTIONS = {
    "set": "set",
    "associativity": "associativity",
    "block": "block",
    "pht": "pht_size",
}


def _parse_int(option: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"option {option!r} expects an integer, got {value!r}") from None


def parse_arguments(argv: Sequence[str]) -> SimConfig:
    """Build a configuration from ``keyword value`` pairs.

    ``argv`` excludes the program name. Any word that is not a known keyword
    is taken as the simulator name, and the word after it is skipped.
    """
    config = SimConfig()
    words = iter(argv)
    for word in words:
        if word in _INT_OPTIONS or word == "trace_file":
            try:
                value = next(words)
            except StopIteration:
                raise ValueError(f"option {word!r} expects a value") from None
            if word == "trace_file":
                config.trace_file = value
            else:
                setattr(config, _INT_OPTIONS[word], _parse_int(word, value))
        else:
            config.simulator_name = word
            next(words, None)
    return config


def create_predictor(config: SimConfig) -> BranchPredictor:
    """Build the direction predictor, sized by ``pht_size`` when given."""
    if config.pht_size is None:
        return BranchPredictor()
    return BranchPredictor(config.pht_size)


def create_btb(config: SimConfig) -> BranchTargetBuffer:
    """Build the target buffer; a set count requires associativity and block too."""
    if config.set is None:
        return BranchTargetBuffer()
    if config.associativity is None or config.block is None:
        raise ValueError("Associativity and block size must be specified for BTB")
    return BranchTargetBuffer(
        BTBConfig(block=config.block, associativity=config.associativity, set=config.set)
    )