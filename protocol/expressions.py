"""Composite polynomial expressions over multilinear extensions.

A Composite is an infix expression

    operands[0] operators[0] operands[1] operators[1] ... operands[-1]

with MUL binding tighter than ADD. Both full evaluation (every operand reduced
to a scalar first) and pointwise reduction (every operand kept as a value
vector) go through the same shunting-yard evaluator, which works on a tagged
union of scalar and polynomial operands.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Union

from primitives.field import FF, to_field
from primitives.multilinear import MultilinearExtension


# --- Operators ---

class Op(Enum):
    """Binary operator joining two composite operands."""
    ADD = "add"
    MUL = "mul"


def precedence(op: Op) -> int:
    """Binding strength: ADD = 0 < MUL = 1."""
    return 1 if op is Op.MUL else 0


# --- Operand Tagged Union ---

@dataclass(eq=False)
class ScalarOperand:
    """A field element operand."""
    value: FF


@dataclass(eq=False)
class PolyOperand:
    """A multilinear polynomial operand, combined pointwise."""
    mle: MultilinearExtension


Operand = Union[ScalarOperand, PolyOperand]


def apply_op(op: Op, left: Operand, right: Operand) -> Operand:
    """Combine two operands of the same variant.

    Raises:
        TypeError: If a scalar is combined with a polynomial
    """
    if isinstance(left, ScalarOperand) and isinstance(right, ScalarOperand):
        if op is Op.ADD:
            return ScalarOperand(left.value + right.value)
        return ScalarOperand(left.value * right.value)
    if isinstance(left, PolyOperand) and isinstance(right, PolyOperand):
        if op is Op.ADD:
            return PolyOperand(left.mle.add(right.mle))
        return PolyOperand(left.mle.mul(right.mle))
    raise TypeError(
        f"Cannot apply {op.name} to {type(left).__name__} and {type(right).__name__}"
    )


def shunting_yard(values: Sequence[Operand], ops: Sequence[Op]) -> Operand:
    """Evaluate an infix operand/operator sequence with MUL before ADD.

    Pass 1 converts infix to postfix: an incoming operator first pops every
    stacked operator with precedence >= its own, e.g. 2 + 2 * 2 -> [2, 2, 2, *, +].
    Pass 2 walks the postfix list left to right replacing each
    (left, right, op) triple with its value.

    Raises:
        ValueError: If len(values) != len(ops) + 1
    """
    if len(values) != len(ops) + 1:
        raise ValueError(
            f"operator length is not 1 less than value length ({len(ops)} ops, {len(values)} values)"
        )

    # --- Infix -> postfix ---
    output: List[Union[Operand, Op]] = []
    stack: List[Op] = []
    for i, value in enumerate(values):
        output.append(value)
        if i < len(ops):
            op = ops[i]
            while stack and precedence(op) <= precedence(stack[-1]):
                output.append(stack.pop())
            stack.append(op)
    while stack:
        output.append(stack.pop())

    # --- Postfix evaluation ---
    pending: List[Operand] = []
    for token in output:
        if isinstance(token, Op):
            right = pending.pop()
            left = pending.pop()
            pending.append(apply_op(token, left, right))
        else:
            pending.append(token)
    return pending[0]


# --- Composite ---

class Composite:
    """Precedence-respecting sum/product of same-size multilinear extensions."""

    def __init__(self, operands: Sequence, operators: Sequence[Op]):
        if len(operators) + 1 != len(operands):
            raise ValueError("ops length is not 1 less than hypercubes length")

        polys = [
            p if isinstance(p, MultilinearExtension) else MultilinearExtension(p)
            for p in operands
        ]
        size = len(polys[0])
        for p in polys:
            if len(p) != size:
                raise ValueError(f"Not all the polys have the same length ({len(p)} != {size})")

        self.operands: List[MultilinearExtension] = polys
        self.operators: List[Op] = list(operators)

    @property
    def num_vars(self) -> int:
        return self.operands[0].num_vars

    @property
    def degree(self) -> int:
        """Per-variable degree: longest run of MUL-joined operands."""
        best = run = 1
        for op in self.operators:
            run = run + 1 if op is Op.MUL else 1
            best = max(best, run)
        return best

    def evaluate(self, assignment: Sequence[Optional[FF]]) -> FF:
        """Evaluate with every variable bound; None entries are rejected."""
        if len(assignment) != self.num_vars:
            raise ValueError(
                f"Mismatched number of variables: expected {self.num_vars}, got {len(assignment)}"
            )
        if any(v is None for v in assignment):
            raise ValueError("All values should be provided")

        point = [to_field(v) for v in assignment]
        scalars = [ScalarOperand(p.evaluate(point)) for p in self.operands]
        return shunting_yard(scalars, self.operators).value

    def bind(self, var_index: int, value) -> "Composite":
        """Bind one variable of every operand to the same value."""
        return Composite(
            [p.partial_evaluate(var_index, value) for p in self.operands],
            self.operators,
        )

    def bind_leading(self, value) -> "Composite":
        return self.bind(0, value)

    def partial_evaluate(self, assignment: Sequence, var_index: int) -> "Composite":
        """Bind variable var_index of every operand to assignment[var_index]."""
        return self.bind(var_index, assignment[var_index])

    def reduce(self) -> MultilinearExtension:
        """Collapse the expression into one MLE without binding any variable."""
        size = len(self.operands[0])
        if any(len(p) != size for p in self.operands):
            raise ValueError("Not all the polys have the same length")
        return shunting_yard([PolyOperand(p) for p in self.operands], self.operators).mle

    def __repr__(self) -> str:
        ops = ", ".join(op.name for op in self.operators)
        return f"Composite(num_vars={self.num_vars}, operands={len(self.operands)}, ops=[{ops}])"
