"""Layered arithmetic circuits.

Layer 0 is the circuit output. Gate j of layer i produces value j of layer i
and reads two values of layer i + 1; the gates of the last layer read the raw
inputs. Evaluation therefore runs from the inputs upwards and returns the
value vectors output-first, the order the GKR prover consumes them in.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from primitives.field import FF, to_field_array


class GateOp(Enum):
    ADD = "add"
    MUL = "mul"


@dataclass(frozen=True)
class Gate:
    """Binary gate reading two values of the next layer."""
    left: int
    right: int
    op: GateOp


# (left_index, right_index, op) of one gate
Wire = Tuple[int, int, GateOp]


class Circuit:
    """Layered arithmetic circuit, output layer first."""

    def __init__(self, layers: Sequence[Sequence[Gate]], num_inputs: Optional[int] = None):
        if len(layers) == 0:
            raise ValueError("Circuit needs at least one gate layer")
        for i, layer in enumerate(layers):
            if len(layer) == 0:
                raise ValueError(f"Layer {i} has no gates")

        self.layers: List[List[Gate]] = [list(layer) for layer in layers]
        if num_inputs is None:
            num_inputs = max(max(g.left, g.right) for g in self.layers[-1]) + 1
        self.num_inputs = num_inputs

        for i, layer in enumerate(self.layers):
            width = self.layer_width(i + 1)
            for j, gate in enumerate(layer):
                if not (0 <= gate.left < width and 0 <= gate.right < width):
                    raise IndexError(
                        f"Layer {i} gate {j} reads ({gate.left}, {gate.right}) "
                        f"but layer {i + 1} has width {width}"
                    )

    @property
    def depth(self) -> int:
        """Number of gate layers."""
        return len(self.layers)

    def layer_width(self, i: int) -> int:
        """Number of values in layer i; layer `depth` is the input layer."""
        if i == self.depth:
            return self.num_inputs
        return len(self.layers[i])

    def wiring(self, i: int) -> List[Wire]:
        """(left, right, op) of every gate in layer i, by output position."""
        return [(g.left, g.right, g.op) for g in self.layers[i]]

    def evaluate(self, inputs: Sequence) -> List[FF]:
        """Forward evaluation.

        Returns:
            depth + 1 value vectors: output layer first, inputs last
        """
        if len(inputs) != self.num_inputs:
            raise ValueError(f"Circuit expects {self.num_inputs} inputs, got {len(inputs)}")

        values = [to_field_array(inputs)]
        for layer in reversed(self.layers):
            prev = values[-1]
            lefts = prev[np.array([g.left for g in layer])]
            rights = prev[np.array([g.right for g in layer])]
            is_mul = np.array([g.op is GateOp.MUL for g in layer])

            out = lefts + rights
            out[is_mul] = (lefts * rights)[is_mul]
            values.append(out)

        values.reverse()
        return values
