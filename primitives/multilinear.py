"""Multilinear extensions over the boolean hypercube.

A MultilinearExtension stores the 2^n evaluations of a function on {0,1}^n and
represents the unique multilinear polynomial agreeing with them.

Variable ordering: variable j is selected by bit (n - 1 - j) of the index, i.e.
values are listed in lexicographic order of (x_0, ..., x_{n-1}) with x_0 the
most significant bit. Binding variable 0 therefore halves the table into its
top and bottom halves, and blow_up_right appends trailing (low-order)
variables.
"""

from typing import Iterable, List, Optional, Sequence

import numpy as np

from primitives.field import FF, field_sum, log2_exact, to_field, to_field_array, to_ints


class MultilinearExtension:
    """Multilinear polynomial in evaluation form over {0,1}^num_vars."""

    def __init__(self, values: Iterable, num_vars: Optional[int] = None):
        arr = to_field_array(values)
        if arr.ndim != 1:
            raise ValueError(f"Expected a 1D value vector, got {arr.ndim}D")
        n = log2_exact(len(arr))
        if num_vars is not None and num_vars != n:
            raise ValueError(f"{len(arr)} values do not describe {num_vars} variables")
        self.values = arr
        self.num_vars = n

    # --- Evaluation ---

    def partial_evaluate(self, var_index: int, val) -> "MultilinearExtension":
        """Bind variable var_index to val, leaving an MLE in num_vars - 1 variables.

        Entries a (variable = 0) and b (variable = 1) that differ only in that
        variable combine as a + val * (b - a).
        """
        if not 0 <= var_index < self.num_vars:
            raise ValueError(f"Variable index {var_index} out of range for {self.num_vars} variables")
        val = to_field(val)
        table = self.values.reshape((1 << var_index, 2, -1))
        lo = table[:, 0, :]
        hi = table[:, 1, :]
        return MultilinearExtension((lo + val * (hi - lo)).reshape(-1))

    def fix_variables(self, point: Sequence) -> "MultilinearExtension":
        """Bind the leading len(point) variables, in order."""
        if len(point) > self.num_vars:
            raise ValueError(f"Cannot fix {len(point)} variables of a {self.num_vars}-variable MLE")
        result = self
        for value in point:
            result = result.partial_evaluate(0, value)
        return result

    def solve(self, assignment: Sequence[Optional[FF]]) -> "MultilinearExtension":
        """Bind every variable whose assignment is not None; None leaves it free."""
        if len(assignment) > self.num_vars:
            raise ValueError(f"Assignment has {len(assignment)} entries, MLE has {self.num_vars} variables")
        result = self
        bound = 0
        for i, value in enumerate(assignment):
            if value is None:
                continue
            result = result.partial_evaluate(i - bound, value)
            bound += 1
        return result

    def evaluate(self, point: Sequence) -> FF:
        """Evaluate at a full point: sum_i values[i] * prod_j (p_j or 1 - p_j)."""
        if len(point) != self.num_vars:
            raise ValueError(f"Invalid number of variables: expected {self.num_vars}, got {len(point)}")
        return self.fix_variables(point).values[0]

    def sum_over_hypercube(self) -> FF:
        """Brute-force sum of evaluate() over every boolean point.

        Off the hot path: sum-check never needs the full hypercube sum.
        """
        n = self.num_vars
        total = FF(0)
        for i in range(1 << n):
            point = [FF((i >> (n - 1 - j)) & 1) for j in range(n)]
            total = total + self.evaluate(point)
        return total

    def evaluate_at_round(self, round: int, partial: Sequence, x) -> FF:
        """Round polynomial of sum-check at x.

        Fixes the first `round` variables to partial, variable `round` to x and
        sums over all boolean assignments of the remaining variables.
        """
        if not 0 <= round < self.num_vars:
            raise ValueError(f"Round {round} out of range for {self.num_vars} variables")
        fixed = self.fix_variables(list(partial[:round]) + [x])
        return field_sum(fixed.values)

    # --- Variable Injection ---

    def blow_up_right(self, k: int) -> "MultilinearExtension":
        """Append k trailing variables the polynomial does not depend on."""
        idx = np.arange(1 << (self.num_vars + k)) >> k
        return MultilinearExtension(self.values[idx])

    def blow_up_left(self, k: int) -> "MultilinearExtension":
        """Prepend k leading variables the polynomial does not depend on."""
        mask = len(self.values) - 1
        idx = np.arange(1 << (self.num_vars + k)) & mask
        return MultilinearExtension(self.values[idx])

    # --- Pointwise Arithmetic ---

    def _check_compatible(self, other: "MultilinearExtension") -> None:
        if self.num_vars != other.num_vars:
            raise ValueError(
                f"Polynomials must have the same number of variables ({self.num_vars} != {other.num_vars})"
            )

    def scalar_mul(self, value) -> "MultilinearExtension":
        return MultilinearExtension(self.values * to_field(value))

    def add(self, other: "MultilinearExtension") -> "MultilinearExtension":
        self._check_compatible(other)
        return MultilinearExtension(self.values + other.values)

    def mul(self, other: "MultilinearExtension") -> "MultilinearExtension":
        self._check_compatible(other)
        return MultilinearExtension(self.values * other.values)

    __add__ = add
    __mul__ = mul

    # --- Misc ---

    def to_list(self) -> List[int]:
        return to_ints(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MultilinearExtension):
            return NotImplemented
        return self.num_vars == other.num_vars and np.array_equal(self.values, other.values)

    __hash__ = None

    def __repr__(self) -> str:
        return f"MultilinearExtension(num_vars={self.num_vars}, values={self.to_list()})"
