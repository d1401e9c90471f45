"""Command that replays a trace through the branch prediction simulators."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from tracesim.config import SimConfig, parse_arguments
from tracesim.simulator import SimulationResult, simulate, simulator_names
from tracesim.trace import TraceError, open_trace


def run(config: SimConfig, out: TextIO) -> dict[str, SimulationResult]:
    """Run the configured simulator, or every simulator when none is named.

    Each simulator reads the trace afresh. Returns the results by name.
    """
    names = simulator_names()
    if config.simulator_name:
        if config.simulator_name not in names:
            raise ValueError(f"Unknown simulator type: {config.simulator_name}")
        names = [config.simulator_name]

    results: dict[str, SimulationResult] = {}
    for name in names:
        with open_trace(config.trace_file) as words:
            out.write(f"Running simulator: {name}\n")
            result = simulate(name, words, config)
        out.write(result.report() + "\n")
        results[name] = result
    return results


def main(argv: Sequence[str] | None = None) -> int:
    """Parse ``keyword value`` arguments and run the simulators."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        config = parse_arguments(args)
        run(config, sys.stdout)
    except (TraceError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())