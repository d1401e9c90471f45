"""Set-associative instruction and data cache simulation over address traces."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

FLASH_LATENCY = 1000
SDRAM_LATENCY = 20
SRAM_LATENCY = 1
PSRAM_LATENCY = 400

_WORD_MASK = 0xFFFFFFFF

_SRAM_RANGE = range(0x0F000000, 0x0F002000)
_FLASH_RANGE = range(0x30000000, 0x31000000)
_SDRAM_RANGE = range(0xA0000000, 0xA1000000)
_PSRAM_RANGE = range(0x80000000, 0x81000000)


@dataclass(frozen=True)
class CacheResult:
    """Hit and miss counts for one cache geometry."""

    block: int
    associativity: int
    block_size: int
    hit: int
    miss: int
    miss_penalty: int | None = None

    def hit_rate(self) -> float:
        """Share of accesses that hit; NaN for an empty trace."""
        total = self.hit + self.miss
        return self.hit / total if total else math.nan

    def amat(self) -> float:
        """Average memory access time in cycles; NaN when nothing missed."""
        if self.miss_penalty is None:
            raise ValueError("no miss penalty was recorded for this cache")
        total = self.hit + self.miss
        if total == 0 or self.miss == 0:
            return math.nan
        return (self.miss / total) * (self.miss_penalty / self.miss) + 1

    def report(self) -> str:
        """One summary line as printed by the sweep."""
        line = (
            f"block: {self.block}, associativity: {self.associativity}, "
            f"block_size: {self.block_size}\t"
            f"hit: {self.hit}, miss: {self.miss}, hit rate: {self.hit_rate():g}"
        )
        if self.miss_penalty is not None:
            line += f"\tAMAT: {self.amat():g}"
        return line


def miss_latency(pc: int, block_size: int) -> int:
    """Cycles charged for a miss at ``pc`` when filling ``block_size`` words."""
    if pc in _SRAM_RANGE:
        return SRAM_LATENCY
    if pc in _FLASH_RANGE:
        return FLASH_LATENCY * block_size
    if pc in _SDRAM_RANGE:
        return SDRAM_LATENCY * block_size
    if pc in _PSRAM_RANGE:
        return PSRAM_LATENCY * block_size
    return 0


def _check_geometry(block: int, associativity: int, block_size: int) -> None:
    for name, value in (("block", block), ("associativity", associativity), ("block_size", block_size)):
        if value < 1:
            raise ValueError(f"{name} must be positive, got {value}")


def _fill(ways: list[int | None], tag: int) -> None:
    """Place ``tag`` in the first free way, or shift out the last way."""
    try:
        ways[ways.index(None)] = tag
    except ValueError:
        ways.insert(0, tag)
        ways.pop()


def inst_cache_sim(pcs: Iterable[int], block: int, associativity: int, block_size: int) -> CacheResult:
    """Simulate an instruction cache; SRAM addresses are not cached."""
    _check_geometry(block, associativity, block_size)
    offset_bits = 2 + int(math.log2(block_size))
    index_bits = int(math.log2(block))
    index_mask = (1 << index_bits) - 1
    sets: list[list[int | None]] = [[None] * associativity for _ in range(block)]

    hit = miss = penalty = 0
    for pc in pcs:
        ways = sets[(pc >> offset_bits) & index_mask]
        tag = pc >> (index_bits + offset_bits)
        if tag in ways:
            hit += 1
            continue
        miss += 1
        penalty = (penalty + miss_latency(pc, block_size)) & _WORD_MASK
        if pc in _SRAM_RANGE:
            continue
        _fill(ways, tag)
    return CacheResult(block, associativity, block_size, hit, miss, penalty)


def data_cache_sim(pcs: Iterable[int], block: int, associativity: int, block_size: int) -> CacheResult:
    """Simulate a data cache over word addresses."""
    _check_geometry(block, associativity, block_size)
    offset = int(math.log2(block_size))
    index_width = int(math.log2(block))
    tag_shift = 32 - index_width - offset
    index_mask = (1 << index_width) - 1
    sets: list[list[int | None]] = [[None] * associativity for _ in range(block)]

    hit = miss = 0
    for pc in pcs:
        ways = sets[(pc >> (offset + 2)) & index_mask]
        tag = pc >> tag_shift
        if tag in ways:
            hit += 1
            continue
        miss += 1
        _fill(ways, tag)
    return CacheResult(block, associativity, block_size, hit, miss)