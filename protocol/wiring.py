"""Wiring predicates and per-layer composite polynomials for GKR.

For layer i with output width Wz and input width Wb (the width of layer i+1):

    add_i(z, b, c) = 1  iff gate z of layer i is ADD(b, c)
    mul_i(z, b, c) = 1  iff gate z of layer i is MUL(b, c)

Each index is zero-padded to its power-of-two bit width and packed as
z | b | c, z in the highest bits and c in the lowest. Positions no gate maps
to stay zero.

The layer identity proven by sum-check is

    W_i(z) = sum_{b,c} add_i(z,b,c) * (W(b) + W(c)) + mul_i(z,b,c) * W(b) * W(c)

where W is the multilinear extension of layer i+1.
"""

from typing import List, Sequence, Tuple

import numpy as np

from primitives.field import FF, ceil_log2, pad_to_power_of_two
from primitives.multilinear import MultilinearExtension
from protocol.circuit import Circuit, GateOp
from protocol.expressions import Composite, Op


def layer_vars(width: int, min_vars: int = 1) -> int:
    """Variable count of a layer MLE holding `width` values."""
    return max(min_vars, ceil_log2(width))


def layer_mle(values: Sequence, min_vars: int = 1) -> MultilinearExtension:
    """Multilinear extension of a layer's values, zero-padded to a power of two."""
    return MultilinearExtension(pad_to_power_of_two(values, 1 << min_vars))


def wiring_predicates(
    circuit: Circuit, i: int, min_vars: int = 1
) -> Tuple[MultilinearExtension, MultilinearExtension]:
    """Build (add_i, mul_i) over the joint (z, b, c) space of layer i."""
    z_bits = layer_vars(circuit.layer_width(i), min_vars)
    k = layer_vars(circuit.layer_width(i + 1), min_vars)
    size = 1 << (z_bits + 2 * k)

    add_table = np.zeros(size, dtype=np.int64)
    mul_table = np.zeros(size, dtype=np.int64)
    for z, (left, right, op) in enumerate(circuit.wiring(i)):
        index = (z << (2 * k)) | (left << k) | right
        if op is GateOp.ADD:
            add_table[index] = 1
        else:
            mul_table[index] = 1

    return MultilinearExtension(FF(add_table)), MultilinearExtension(FF(mul_table))


def all_wiring_predicates(
    circuit: Circuit, min_vars: int = 1
) -> List[Tuple[MultilinearExtension, MultilinearExtension]]:
    """Wiring predicates of every layer (depends only on public structure)."""
    return [wiring_predicates(circuit, i, min_vars) for i in range(circuit.depth)]


def fold_predicate(
    predicate: MultilinearExtension,
    alpha: FF,
    beta: FF,
    b_point: Sequence[FF],
    c_point: Sequence[FF],
) -> MultilinearExtension:
    """alpha * predicate(b_point, ., .) + beta * predicate(c_point, ., .).

    Merges the two claims W(b*) and W(c*) from the previous layer into a
    single sum-check instance.
    """
    at_b = predicate.fix_variables(b_point).scalar_mul(alpha)
    at_c = predicate.fix_variables(c_point).scalar_mul(beta)
    return at_b.add(at_c)


def layer_composite(
    add_pred: MultilinearExtension,
    mul_pred: MultilinearExtension,
    w_next: MultilinearExtension,
) -> Composite:
    """add' * (W(b) + W(c)) + mul' * W(b) * W(c) over the joint (b, c) space."""
    k = w_next.num_vars
    w_b = w_next.blow_up_right(k)  # function of the leading (b) variables
    w_c = w_next.blow_up_left(k)   # function of the trailing (c) variables
    return Composite(
        [add_pred, w_b.add(w_c), mul_pred, w_b.mul(w_c)],
        [Op.MUL, Op.ADD, Op.MUL],
    )


def split_point(challenges: Sequence[FF]) -> Tuple[List[FF], List[FF]]:
    """Split a (b, c) challenge vector into its b* and c* halves."""
    half = len(challenges) // 2
    return list(challenges[:half]), list(challenges[half:])
