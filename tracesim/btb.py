"""Set-associative branch target buffer."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field

BLOCK = 1
ASSOCIATIVITY = 1
SET = 16

_WORD_MASK = 0xFFFFFFFF


def _log(message: str) -> None:
    print(f"\033[1;34m[log-tracer]\033[0m \033[1;34m[btb]\033[0m {message}", file=sys.stdout)


@dataclass
class BTBEntry:
    """One slot of a way: tag, target address and valid bit."""

    tag: int = 0
    target: int = 0
    valid: bool = False


@dataclass(frozen=True)
class BTBConfig:
    """Geometry of a branch target buffer."""

    block: int = BLOCK
    associativity: int = ASSOCIATIVITY
    set: int = SET


def _fresh_way(block: int) -> list[BTBEntry]:
    return [BTBEntry() for _ in range(block)]


@dataclass
class BranchTargetBuffer:
    """Maps branch addresses to their last taken target."""

    config: BTBConfig = field(default_factory=BTBConfig)

    def __post_init__(self) -> None:
        cfg = self.config
        for name in ("block", "associativity", "set"):
            if getattr(cfg, name) < 1:
                raise ValueError(f"BTB {name} must be positive, got {getattr(cfg, name)}")
        self.block = cfg.block
        self.associativity = cfg.associativity
        self.set = cfg.set
        self.table: list[list[list[BTBEntry]]] = [
            [_fresh_way(cfg.block) for _ in range(cfg.associativity)] for _ in range(cfg.set)
        ]
        _log(f"block: {self.block}, associativity: {self.associativity}, set: {self.set}")

    def _locate(self, pc: int) -> tuple[int, int, int]:
        offset = pc & ((1 << int(math.log2(self.block))) - 1)
        index = (pc >> 2) & ((1 << int(math.log2(self.set))) - 1)
        tag = pc >> (int(math.log2(self.block + self.set)) + 2)
        return offset, index, tag

    def get_target(self, pc: int) -> int:
        """Return the stored target for ``pc``, or the fall-through address."""
        offset, index, tag = self._locate(pc)
        for way in self.table[index]:
            entry = way[offset]
            if entry.valid and entry.tag == tag:
                return entry.target
        return (pc + 4) & _WORD_MASK

    def update(self, pc: int, target: int) -> None:
        """Record ``target`` for ``pc``, evicting the oldest way when the set is full."""
        offset, index, tag = self._locate(pc)
        ways = self.table[index]
        empty_way: list[BTBEntry] | None = None
        for way in ways:
            for entry in way:
                if entry.valid and entry.tag == tag:
                    entry.target = target
                    return
            if not any(entry.valid for entry in way):
                empty_way = way
        if empty_way is not None:
            empty_way[offset] = BTBEntry(tag, target, True)
            return
        ways.pop(0)
        new_way = _fresh_way(self.block)
        new_way[offset] = BTBEntry(tag, target, True)
        ways.append(new_way)

    def info(self) -> tuple[int, int, int]:
        """Log and return the geometry (block, associativity, set) as laid out in the table."""
        geometry = (len(self.table[0][0]), len(self.table[0]), len(self.table))
        _log("block: {}, associativity: {}, set: {}".format(*geometry))
        return geometry