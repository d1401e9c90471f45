"""Branch direction predictors driven by a global history register."""

from __future__ import annotations

import math
from collections import deque
from collections.abc import Sequence
from enum import IntEnum

PHT_SIZE = 1024
BIT_WIDTH = 1
HIST_LEN = 59
THRESHOLD = 127

_WORD_MASK = 0xFFFFFFFF


class SaturationState(IntEnum):
    """State of a two-bit saturating counter."""

    STRONGLY_NOT_TAKEN = 0
    WEAKLY_NOT_TAKEN = 1
    WEAKLY_TAKEN = 2
    STRONGLY_TAKEN = 3

    def next(self, taken: bool) -> SaturationState:
        """Return the state after observing a branch outcome."""
        if taken:
            return SaturationState(min(self + 1, SaturationState.STRONGLY_TAKEN))
        return SaturationState(max(self - 1, SaturationState.STRONGLY_NOT_TAKEN))

    def predicts_taken(self) -> bool:
        """True when the counter leans towards taken."""
        return self >= SaturationState.WEAKLY_TAKEN


def ghr_value(ghr: Sequence[int], width: int) -> int:
    """Pack the first ``width`` history bits into an integer, newest bit lowest."""
    if width > len(ghr):
        raise IndexError(f"history holds {len(ghr)} bits, {width} requested")
    value = 0
    for position, bit in enumerate(list(ghr)[:width]):
        value |= (int(bit) & 1) << (position * BIT_WIDTH)
    return value


class BranchPredictor:
    """A set of branch direction predictors sharing one global history."""

    def __init__(self, pht_size: int = PHT_SIZE) -> None:
        if pht_size < 1:
            raise ValueError(f"pattern history table size must be positive, got {pht_size}")
        self.pht_size = pht_size
        self.index_width = int(math.log2(pht_size))
        self.addr_mask = (1 << self.index_width) - 1

        self.counter = SaturationState.STRONGLY_NOT_TAKEN
        self.ghr: deque[bool] = deque([False] * (HIST_LEN + 1), maxlen=HIST_LEN + 1)

        # Local history register and the fixed direction of the static local scheme.
        self.bhr = 0
        self.local_direction = True
        # Outcomes seen by the static not-taken scheme, indexed by taken.
        self.backward_direction = False
        self.backward_outcomes = [0, 0]

        self.pht = [SaturationState.STRONGLY_NOT_TAKEN] * pht_size
        self.bimode_taken = [SaturationState.STRONGLY_NOT_TAKEN] * pht_size
        self.bimode_not_taken = [SaturationState.STRONGLY_NOT_TAKEN] * pht_size
        self.bimode_choice = [SaturationState.STRONGLY_NOT_TAKEN] * pht_size

        self.perceptron_table = [[0] * (HIST_LEN + 1) for _ in range(pht_size)]
        self.perceptron_steps = 0

    def _pc_index(self, pc: int) -> int:
        return (pc >> 2) & self.addr_mask

    def _history_index(self, pc: int) -> int:
        return self._pc_index(pc) ^ ghr_value(self.ghr, self.index_width)

    # Single saturating counter

    def saturate_predict(self) -> bool:
        """Predict using one global two-bit counter."""
        return self.counter.predicts_taken()

    def saturate_update(self, taken: bool) -> None:
        """Train the global two-bit counter."""
        self.counter = self.counter.next(taken)

    # Global history (gshare)

    def global_history_predict(self, pc: int) -> bool:
        """Predict from the table entry selected by pc xor history."""
        return self.pht[self._history_index(pc)].predicts_taken()

    def global_history_update(self, pc: int, taken: bool) -> None:
        """Train the table entry selected by pc xor history."""
        index = self._history_index(pc)
        self.pht[index] = self.pht[index].next(taken)

    # Local history

    def local_history_predict(self, pc: int) -> bool:
        """Static prediction: the local scheme's fixed direction (taken)."""
        return self.local_direction

    def local_history_update(self, taken: bool) -> None:
        """Shift an outcome into the local history register."""
        self.bhr = ((self.bhr << 1) | int(bool(taken))) & _WORD_MASK

    # Bi-mode

    def bimode_predict(self, pc: int) -> bool:
        """Predict from the bias table picked by the choice counter."""
        index = self._history_index(pc)
        if self.bimode_choice[index].predicts_taken():
            return self.bimode_taken[index].predicts_taken()
        return self.bimode_not_taken[index].predicts_taken()

    def bimode_update(self, pc: int, taken: bool) -> None:
        """Train the selected bias table and then the choice counter."""
        index = self._history_index(pc)
        choice = self.bimode_choice[index]
        if choice.predicts_taken():
            self.bimode_taken[index] = self.bimode_taken[index].next(taken)
        else:
            self.bimode_not_taken[index] = self.bimode_not_taken[index].next(taken)
        self.bimode_choice[index] = choice.next(taken)

    # Perceptron

    def perceptron_predict(self, pc: int) -> bool:
        """Compute the perceptron output for ``pc`` and record its magnitude.

        The output is accumulated as an unsigned 32-bit word, so the
        non-negative test that decides the direction always holds.
        """
        weights = self.perceptron_table[self._pc_index(pc)]
        total = weights[0]
        for bit, weight in zip(self.ghr, weights[1:]):
            total += weight if bit else -weight
        self.perceptron_steps = total & _WORD_MASK
        return True

    def perceptron_update(self, pc: int, resolved: bool, predicted: bool, target: int) -> None:
        """Train the perceptron on a mispredict or a low-confidence output."""
        if resolved == predicted and self.perceptron_steps > THRESHOLD:
            return
        weights = self.perceptron_table[self._pc_index(pc)]
        if resolved:
            weights[0] = min(weights[0] + 1, THRESHOLD + 1)
        else:
            weights[0] = max(weights[0] - 1, -THRESHOLD - 1)
        for position, bit in enumerate(list(self.ghr)[:HIST_LEN], start=1):
            if bool(bit) == resolved:
                weights[position] = min(weights[position] + 1, THRESHOLD)
            else:
                weights[position] = max(weights[position] - 1, -THRESHOLD)

    # Static not-taken

    def backward_propagation_predict(self) -> bool:
        """Static prediction: the scheme's fixed direction (not taken)."""
        return self.backward_direction

    def backward_propagation_update(self, taken: bool) -> None:
        """Count an outcome seen by the static not-taken scheme."""
        self.backward_outcomes[int(bool(taken))] += 1

    # History

    def update_ghr(self, taken: bool) -> None:
        """Shift a new outcome into the newest end of the global history."""
        self.ghr.appendleft(bool(taken))