"""Command that sweeps cache geometries over a compressed address trace."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from itertools import product

from tracesim.cache import CacheResult, data_cache_sim, inst_cache_sim
from tracesim.trace import TraceError, open_trace

BLOCKS = (4, 8, 16, 64)
ASSOCIATIVITIES = (1, 2, 4, 8, 16)
BLOCK_SIZES = (1, 2, 4, 8)

_SIMULATORS = {"inst": inst_cache_sim, "data": data_cache_sim}


def sweep(trace_file: str, cache_type: str = "inst") -> list[CacheResult]:
    """Simulate every geometry in the sweep over the trace in ``trace_file``."""
    try:
        simulate = _SIMULATORS[cache_type]
    except KeyError:
        raise ValueError(f"Invalid cache type: {cache_type}") from None
    with open_trace(trace_file) as words:
        pcs = list(words)
    return [
        simulate(pcs, block, associativity, block_size)
        for block, associativity, block_size in product(BLOCKS, ASSOCIATIVITIES, BLOCK_SIZES)
    ]


def main(argv: Sequence[str] | None = None) -> int:
    """Usage: cachesim <trace_file> [inst|data]."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Usage: cachesim <trace_file> [inst|data]")
        return 1
    trace_file = args[0]
    cache_type = args[1] if len(args) > 1 else "inst"
    try:
        results = sweep(trace_file, cache_type)
    except (TraceError, ValueError) as exc:
        print(exc)
        return 1
    for result in results:
        print(result.report())
    return 0


if __name__ == "__main__":
    sys.exit(main())