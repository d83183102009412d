"""GKR proof verification.

The verifier re-derives every challenge from its own transcript, using only the
public circuit wiring, the raw inputs and the values recorded in the proof.
Per layer it checks:

1. Claim link - the layer's claimed sum equals W_out(z) (layer 0) or
   alpha * W(b*) + beta * W(c*) from the previous layer's oracle evaluations
2. Sum-check rounds - e0 + e1 matches the running sum in every round
3. Final check - the last running sum equals
   add'(r) * (W(b*) + W(c*)) + mul'(r) * W(b*) * W(c*)
   where at the last layer W is the MLE of the raw inputs

Any failed check rejects the proof (returns False); the verifier never raises
on a malformed or adversarial proof.
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
    layer_mle,
    layer_vars,
    split_point,
)


def verify_proof(
    circuit: Circuit,
    inputs: Sequence,
    proof: GKRProof,
    config: Optional[GkrConfig] = None,
) -> bool:
    """Verify a GKR proof.

    Args:
        circuit: Public layered circuit description
        inputs: Public raw input vector
        proof: Proof produced by generate_proof
        config: Must match the prover's configuration

    Returns:
        True if proof is valid, False otherwise

    Raises:
        ValueError: If inputs do not match the circuit's input width
    """
    config = config or GkrConfig()
    if len(inputs) != circuit.num_inputs:
        raise ValueError(f"Circuit expects {circuit.num_inputs} inputs, got {len(inputs)}")

    # --- Proof shape ---
    depth = circuit.depth
    if not (len(proof.claimed_sums) == len(proof.round_records) == len(proof.oracle_evals) == depth):
        print(f"ERROR: Proof has {len(proof.claimed_sums)} layers, circuit has {depth}")
        return False
    if len(proof.output) != circuit.layer_width(0):
        print(f"ERROR: Proof output has {len(proof.output)} values, circuit outputs {circuit.layer_width(0)}")
        return False
    for i, evals in enumerate(proof.oracle_evals):
        if len(evals) != 2:
            print(f"ERROR: Layer {i} carries {len(evals)} oracle evaluations, expected 2")
            return False

    transcript = config.new_transcript()
    input_mle = layer_mle(inputs, config.min_layer_vars)

    # --- Output claim ---
    output = layer_mle(proof.output, config.min_layer_vars)
    transcript.absorb_elements(output.values)
    z_point: List[FF] = transcript.squeeze_n(output.num_vars)
    expected_sum = output.evaluate(z_point)

    b_point: List[FF] = []
    c_point: List[FF] = []
    w_b = w_c = FF(0)

    predicates = all_wiring_predicates(circuit, config.min_layer_vars)
    for i in range(depth):
        add_pred, mul_pred = predicates[i]

        if i == 0:
            add_pred = add_pred.fix_variables(z_point)
            mul_pred = mul_pred.fix_variables(z_point)
        else:
            alpha, beta = transcript.squeeze_n(2)
            expected_sum = alpha * w_b + beta * w_c
            add_pred = fold_predicate(add_pred, alpha, beta, b_point, c_point)
            mul_pred = fold_predicate(mul_pred, alpha, beta, b_point, c_point)

        # --- Claim link ---
        claimed_sum = proof.claimed_sums[i]
        if claimed_sum != expected_sum:
            print(f"ERROR: Layer {i} claimed sum {int(claimed_sum)} != expected {int(expected_sum)}")
            return False

        # --- Sum-check rounds ---
        n_rounds = 2 * layer_vars(circuit.layer_width(i + 1), config.min_layer_vars)
        result = sumcheck.verify_rounds(claimed_sum, proof.round_records[i], transcript, num_rounds=n_rounds)
        if not result.accepted:
            print(f"ERROR: Layer {i} sum-check rejected")
            return False

        # --- Next-layer oracle claims ---
        b_point, c_point = split_point(result.challenges)
        if i == depth - 1:
            w_b = input_mle.evaluate(b_point)
            w_c = input_mle.evaluate(c_point)
            recorded_b, recorded_c = proof.oracle_evals[i]
            if recorded_b != w_b or recorded_c != w_c:
                print("ERROR: Input layer evaluations do not match the raw inputs")
                return False
        else:
            w_b, w_c = proof.oracle_evals[i]
        transcript.absorb_elements([w_b, w_c])

        # --- Final check ---
        r = result.challenges
        expected_final = add_pred.evaluate(r) * (w_b + w_c) + mul_pred.evaluate(r) * (w_b * w_c)
        if result.final_claim != expected_final:
            print(f"ERROR: Layer {i} final claim {int(result.final_claim)} != {int(expected_final)}")
            return False

    return True
