# tracesim

Trace-driven simulators for two parts of a processor front end:

- **branch prediction**: direction predictors (a single two-bit saturating
  counter, a gshare-style global-history table, a bi-mode predictor, a
  perceptron, and two static schemes), each paired with a set-associative
  branch target buffer;
- **caches**: instruction and data caches with configurable set count,
  associativity and block size, swept over a grid of configurations.

A trace is a bzip2-compressed file of little-endian 32-bit words, one
program counter (or address) per word. Traces are decompressed by running
`bzcat`, which must be on your `PATH`.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Branch prediction

```
tracesim-branch trace_file run.trace.bz2 perceptron
```

Arguments are keyword/value pairs:

| keyword         | meaning                                             |
|-----------------|-----------------------------------------------------|
| `trace_file`    | path of the bzip2-compressed trace                  |
| `pht`           | pattern history table size (default 1024)           |
| `set`           | number of BTB sets (default 16)                     |
| `associativity` | BTB ways per set (required when `set` is given)     |
| `block`         | BTB entries per way (required when `set` is given)  |

Any other word names the simulator to run, one of `saturat_simulator`,
`global_history`, `bimode`, `perceptron`, `local_history` and
`bp_predictor`. A simulator name also consumes the word after it, so put it
last on the line. Without a simulator name every simulator is run in turn,
each reading the trace afresh.

For each run the command prints `Running simulator: <name>`, followed by the
number of mispredictions, the total number of predictions and the
misprediction rate. Creating a branch target buffer also prints a log line
with its geometry. An unknown simulator name, a missing BTB option or a
trace that cannot be read prints an error to standard error and exits with
status 1.

A prediction counts as wrong when the predicted next address (the BTB
target if the branch is predicted taken, otherwise `pc + 4`) differs from
the next address in the trace.

### The predictors

- `saturat_simulator`: one global two-bit counter.
- `global_history`: a table of two-bit counters indexed by
  `(pc >> 2) xor history`.
- `bimode`: a choice table selecting between a taken-biased and a
  not-taken-biased table, indexed like `global_history`.
- `perceptron`: a table of weight vectors over 59 history bits, trained on
  a misprediction or when the output's magnitude is at most 127. The output
  is accumulated as an unsigned 32-bit value, so the predicted direction is
  always taken; the training still depends on its magnitude.
- `local_history`: always predicts taken; mispredicted outcomes are shifted
  into a local history register that is not used for prediction.
- `bp_predictor`: always predicts not taken; mispredicted outcomes are
  counted.

### From Python

```python
from tracesim.config import SimConfig, parse_arguments
from tracesim.simulator import simulate, simulator_names

pcs = [0x80000000, 0x80000004, 0x80000010, 0x80000014]
result = simulate("bimode", pcs, SimConfig())
print(result.mispredictions, result.total, result.misprediction_rate())
print(result.report())
print(simulator_names())

config = parse_arguments(["pht", "256", "set", "8", "associativity", "2", "block", "1"])
```

`simulate` raises `ValueError` for an unknown simulator and
`tracesim.trace.TraceError` for an empty trace.

The building blocks are available directly:

- `tracesim.predictor.BranchPredictor` and `SaturationState`;
- `tracesim.btb.BranchTargetBuffer`, configured by `BTBConfig`;
- `tracesim.config.create_predictor` and `create_btb`, which build them
  from a `SimConfig`;
- `tracesim.trace.read_words` (words from a binary stream) and
  `open_trace` (a context manager that runs `bzcat` on a file).

`tracesim.branch_cli.run(config, out)` runs the simulators as the command
does, writing to `out` and returning the results by name.

## Caches

```
tracesim-cache run.trace.bz2 [inst|data]
```

runs a sweep over every combination of 4, 8, 16 and 64 sets,
associativities of 1, 2, 4, 8 and 16, and block sizes of 1, 2, 4 and 8
words, for an instruction cache (`inst`, the default) or a data cache
(`data`). It prints one line per configuration with hits, misses and hit
rate. Replacement shifts the ways of a full set and inserts the new tag at
the front.

The instruction cache also reports an average memory access time, using
fixed miss latencies per memory region: SRAM (`0x0f000000`–`0x0f001fff`,
1 cycle, never cached), flash (`0x30000000`–`0x30ffffff`, 1000 cycles per
word), PSRAM (`0x80000000`–`0x80ffffff`, 400 cycles per word) and SDRAM
(`0xa0000000`–`0xa0ffffff`, 20 cycles per word); misses elsewhere cost
nothing. Without a trace file the command prints a usage line and exits
with status 1.

From Python, `tracesim.cache.inst_cache_sim` and
`tracesim.cache.data_cache_sim` take an iterable of addresses and the
geometry and return a `CacheResult` with `hit_rate()`, `amat()` (instruction
cache only) and `report()`. `tracesim.cache.miss_latency` gives the cost of
one miss, and `tracesim.cache_cli.sweep` runs the whole grid for one trace
file.

## What it does not do

- The `local_history` and `bp_predictor` simulators are static schemes; the
  package has no predictor that indexes by per-branch local history and no
  neural predictor beyond the perceptron.
- Traces are only read through `bzcat`; uncompressed trace files are not
  accepted by the commands (use `read_words` on an open file instead).
- The cache sweep grid is fixed; the command takes no options for it.