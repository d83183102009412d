"""GKR proof generation.

The prover evaluates the circuit, then walks it from the output layer down to
the inputs. Each layer's claim about W_i is reduced by one sum-check to two
claims W_{i+1}(b*) and W_{i+1}(c*) about the next layer; the next layer folds
those two claims into one with random alpha, beta.

Transcript order (mirrored exactly by the verifier):
1. absorb padded output, squeeze one challenge per output variable
2. per layer: [i > 0] squeeze alpha, beta -> sum-check rounds -> absorb (W(b*), W(c*))
"""

from typing import List, Optional, Sequence

from primitives.field import FF
from protocol import sumcheck
from protocol.circuit import Circuit
from protocol.config import GkrConfig
from protocol.proof import GKRProof
from protocol.wiring import (
    all_wiring_predicates,
    fold_predicate,
    layer_composite,
    layer_mle,
    split_point,
)


def generate_proof(circuit: Circuit, inputs: Sequence, config: Optional[GkrConfig] = None) -> GKRProof:
    """Generate a GKR proof that `circuit` maps `inputs` to its output.

    Args:
        circuit: Layered circuit, output layer first
        inputs: Raw input values (ints or field elements)
        config: Transcript and padding parameters (defaults to GkrConfig())

    Returns:
        GKRProof with one entry per gate layer
    """
    config = config or GkrConfig()
    transcript = config.new_transcript()

    layer_values = circuit.evaluate(inputs)
    mles = [layer_mle(values, config.min_layer_vars) for values in layer_values]

    proof = GKRProof(output=list(layer_values[0]))

    # --- Output claim ---
    output = mles[0]
    transcript.absorb_elements(output.values)
    z_point: List[FF] = transcript.squeeze_n(output.num_vars)

    b_point: List[FF] = []
    c_point: List[FF] = []

    predicates = all_wiring_predicates(circuit, config.min_layer_vars)
    for i in range(circuit.depth):
        add_pred, mul_pred = predicates[i]

        # --- Restrict predicates to the incoming claim(s) ---
        if i == 0:
            add_pred = add_pred.fix_variables(z_point)
            mul_pred = mul_pred.fix_variables(z_point)
        else:
            alpha, beta = transcript.squeeze_n(2)
            add_pred = fold_predicate(add_pred, alpha, beta, b_point, c_point)
            mul_pred = fold_predicate(mul_pred, alpha, beta, b_point, c_point)

        # --- Sum-check over (b, c) ---
        w_next = mles[i + 1]
        composite = layer_composite(add_pred, mul_pred, w_next)
        layer_proof, challenges = sumcheck.prove(composite, transcript)

        # --- Next-layer oracle claims ---
        b_point, c_point = split_point(challenges)
        w_b = w_next.evaluate(b_point)
        w_c = w_next.evaluate(c_point)
        transcript.absorb_elements([w_b, w_c])

        proof.claimed_sums.append(layer_proof.claimed_sum)
        proof.round_records.append(layer_proof.round_records)
        proof.oracle_evals.append((w_b, w_c))

    return proof
