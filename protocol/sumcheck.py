"""Sum-check protocol for composite multilinear polynomials.

Proves the claim "composite sums to S over {0,1}^n", one variable per round.
Each round the prover sends the round polynomial as its values at 0, 1 and 2
(the composite has per-variable degree <= 2), binds that tuple into the
transcript and receives the challenge that fixes the current leading variable.

Round records are three evaluations, not coefficients: the verifier
interpolates them as a degree <= 2 polynomial. Dropping e2 would lose the
contribution of the product terms.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from primitives.field import FF, field_sum
from primitives.polynomial import evaluate_round_record
from primitives.transcript import Transcript
from protocol.expressions import Composite

# --- Type Aliases ---

RoundRecord = Tuple[FF, FF, FF]  # (e0, e1, e2): round polynomial at 0, 1, 2

# --- Constants ---

MAX_DEGREE = 2
ROUND_POINTS = MAX_DEGREE + 1


# --- Proof Data Structures ---

@dataclass
class SumcheckProof:
    """Claimed hypercube sum and one record per round."""
    claimed_sum: FF
    round_records: List[RoundRecord] = field(default_factory=list)


@dataclass
class SumcheckVerification:
    """Outcome of replaying the sum-check rounds.

    Attributes:
        accepted: False as soon as any round check fails
        final_claim: Value the composite must take at the challenge point
        challenges: One challenge per accepted round
        reason: Why the proof was rejected (empty when accepted)
    """
    accepted: bool
    final_claim: Optional[FF] = None
    challenges: List[FF] = field(default_factory=list)
    reason: str = ""


def _round_data(record: Sequence[FF]) -> List[FF]:
    """Transcript payload of a round: (e0 + e1, e0, e1, e2)."""
    e0, e1, e2 = record
    return [e0 + e1, e0, e1, e2]


def _reject(reason: str, challenges: List[FF]) -> SumcheckVerification:
    print(f"ERROR: {reason}")
    return SumcheckVerification(accepted=False, challenges=challenges, reason=reason)


# --- Prover ---

def round_record(composite: Composite) -> RoundRecord:
    """Evaluations of the round polynomial at 0, 1 and 2.

    For t in {0, 1, 2} the leading variable is bound to t and the reduced
    composite is summed over the boolean hypercube of the remaining variables.
    """
    return tuple(field_sum(composite.bind_leading(FF(t)).reduce().values) for t in range(ROUND_POINTS))


def prove(composite: Composite, transcript: Transcript) -> Tuple[SumcheckProof, List[FF]]:
    """Run the prover side of sum-check.

    Args:
        composite: Polynomial whose hypercube sum is being proven
        transcript: Session transcript, advanced by one absorb/squeeze per round

    Returns:
        (proof, challenges) where challenges[i] bound variable i

    Raises:
        ValueError: If the composite has no variables or degree > 2
    """
    if composite.num_vars == 0:
        raise ValueError("Composite has no variables to sum over")
    if composite.degree > MAX_DEGREE:
        raise ValueError(f"Composite degree {composite.degree} exceeds {MAX_DEGREE}")

    current = composite
    records: List[RoundRecord] = []
    challenges: List[FF] = []

    for _ in range(composite.num_vars):
        record = round_record(current)
        challenge = transcript.absorb_and_squeeze(_round_data(record))

        records.append(record)
        challenges.append(challenge)
        # Each round consumes the current leading variable
        current = current.bind_leading(challenge)

    claimed_sum = records[0][0] + records[0][1]
    return SumcheckProof(claimed_sum=claimed_sum, round_records=records), challenges


# --- Verifier ---

def verify_rounds(
    claimed_sum: FF,
    round_records: Sequence[Sequence[FF]],
    transcript: Transcript,
    num_rounds: Optional[int] = None,
) -> SumcheckVerification:
    """Replay the rounds without an oracle check on the final claim.

    Per round: require three evaluations, check e0 + e1 against the running
    sum, derive the challenge from the same payload the prover absorbed and
    move the running sum to the interpolated round polynomial at the challenge.
    """
    challenges: List[FF] = []
    if num_rounds is not None and len(round_records) != num_rounds:
        return _reject(f"Expected {num_rounds} sum-check rounds, got {len(round_records)}", challenges)

    running_sum = claimed_sum
    for i, record in enumerate(round_records):
        if len(record) != ROUND_POINTS:
            return _reject(
                f"Round {i}: expected {ROUND_POINTS} evaluations (degree <= {MAX_DEGREE}), got {len(record)}",
                challenges,
            )
        e0, e1, _ = record
        if e0 + e1 != running_sum:
            return _reject(f"Round {i}: e0 + e1 = {int(e0 + e1)} != running sum {int(running_sum)}", challenges)

        challenge = transcript.absorb_and_squeeze(_round_data(record))
        challenges.append(challenge)
        running_sum = evaluate_round_record(record, challenge)

    return SumcheckVerification(accepted=True, final_claim=running_sum, challenges=challenges)


def verify(composite: Composite, proof: SumcheckProof, transcript: Transcript) -> bool:
    """Full sum-check verification with oracle access to the composite."""
    result = verify_rounds(proof.claimed_sum, proof.round_records, transcript, num_rounds=composite.num_vars)
    if not result.accepted:
        return False

    oracle = composite.evaluate(result.challenges)
    if result.final_claim != oracle:
        print(f"ERROR: Final claim {int(result.final_claim)} != composite at challenge point {int(oracle)}")
        return False
    return True
