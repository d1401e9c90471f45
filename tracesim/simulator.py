"""Trace-driven evaluation of branch predictors paired with a target buffer."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from tracesim.btb import BranchTargetBuffer
from tracesim.config import SimConfig, create_btb, create_predictor
from tracesim.predictor import BranchPredictor
from tracesim.trace import TraceError

_WORD_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class SimulationResult:
    """Counts gathered over one trace."""

    mispredictions: int
    total: int

    def misprediction_rate(self) -> float:
        """Mispredicted share of all predictions, as a percentage."""
        return self.mispredictions / self.total * 100

    def report(self) -> str:
        """Summary lines as printed after a run."""
        return (
            f"Mispredictions: {self.mispredictions}\n"
            f"Total predictions: {self.total}\n"
            f"Misprediction rate: {self.misprediction_rate():g}%"
        )


@dataclass(frozen=True)
class _Scheme:
    predict: Callable[[BranchPredictor, int], bool]
    on_miss: Callable[[BranchPredictor, int, bool], None] | None = None
    after: Callable[[BranchPredictor, int, bool, bool, int], None] | None = None


def _after_history(predictor: BranchPredictor, pc: int, actual: bool, predicted: bool, target: int) -> None:
    predictor.update_ghr(actual)


def _after_perceptron(
    predictor: BranchPredictor, pc: int, actual: bool, predicted: bool, target: int
) -> None:
    predictor.perceptron_update(pc, actual, predicted, target)


_SCHEMES: dict[str, _Scheme] = {
    "bp_predictor": _Scheme(
        predict=lambda p, pc: p.backward_propagation_predict(),
        on_miss=lambda p, pc, taken: p.backward_propagation_update(taken),
    ),
    "local_history": _Scheme(
        predict=lambda p, pc: p.local_history_predict(pc),
        on_miss=lambda p, pc, taken: p.local_history_update(taken),
    ),
    "saturat_simulator": _Scheme(
        predict=lambda p, pc: p.saturate_predict(),
        on_miss=lambda p, pc, taken: p.saturate_update(taken),
    ),
    "global_history": _Scheme(
        predict=lambda p, pc: p.global_history_predict(pc),
        on_miss=lambda p, pc, taken: p.global_history_update(pc, taken),
        after=_after_history,
    ),
    "bimode": _Scheme(
        predict=lambda p, pc: p.bimode_predict(pc),
        on_miss=lambda p, pc, taken: p.bimode_update(pc, taken),
        after=_after_history,
    ),
    "perceptron": _Scheme(
        predict=lambda p, pc: p.perceptron_predict(pc),
        after=_after_perceptron,
    ),
}


def simulator_names() -> list[str]:
    """Names of the available simulators."""
    return list(_SCHEMES)


def simulate(kind: str, pcs: Iterable[int], config: SimConfig | None = None) -> SimulationResult:
    """Replay a program-counter trace through the simulator named ``kind``."""
    try:
        scheme = _SCHEMES[kind]
    except KeyError:
        raise ValueError(f"Unknown simulator type: {kind}") from None
    config = config if config is not None else SimConfig()
    predictor = create_predictor(config)
    btb: BranchTargetBuffer = create_btb(config)

    trace = iter(pcs)
    try:
        pc = next(trace)
    except StopIteration:
        raise TraceError("Error reading PC from trace file.") from None

    mispredictions = 0
    total = 1
    for next_pc in trace:
        fallthrough = (pc + 4) & _WORD_MASK
        actual = next_pc != fallthrough
        predicted = scheme.predict(predictor, pc)
        guess = btb.get_target(pc) if predicted else fallthrough
        if guess != next_pc:
            mispredictions += 1
            if scheme.on_miss is not None:
                scheme.on_miss(predictor, pc, actual)
            btb.update(pc, next_pc)
        if scheme.after is not None:
            scheme.after(predictor, pc, actual, predicted, next_pc)
        total += 1
        pc = next_pc
    return SimulationResult(mispredictions=mispredictions, total=total)