"""Tests for the sum-check protocol."""

import pytest

from primitives.field import FF, field_sum
from primitives.multilinear import MultilinearExtension
from primitives.polynomial import evaluate_round_record
from primitives.transcript import Transcript
from protocol.expressions import Composite, Op
from protocol.sumcheck import SumcheckProof, prove, round_record, verify, verify_rounds


def _random_composite(num_vars: int) -> Composite:
    size = 1 << num_vars
    return Composite(
        [MultilinearExtension(FF.Random(size)) for _ in range(4)],
        [Op.MUL, Op.ADD, Op.MUL],
    )


def _tampered(proof: SumcheckProof, round_idx: int, slot: int) -> SumcheckProof:
    records = list(proof.round_records)
    record = list(records[round_idx])
    record[slot] = record[slot] + FF(1)
    records[round_idx] = tuple(record)
    return SumcheckProof(claimed_sum=proof.claimed_sum, round_records=records)


class TestSumcheckProver:

    @pytest.mark.parametrize("num_vars", [1, 2, 3, 4])
    def test_claimed_sum_is_hypercube_sum(self, num_vars: int) -> None:
        composite = _random_composite(num_vars)
        proof, challenges = prove(composite, Transcript())
        assert proof.claimed_sum == composite.reduce().sum_over_hypercube()
        assert len(proof.round_records) == num_vars
        assert len(challenges) == num_vars

    def test_round_sums_chain(self) -> None:
        """e0 + e1 of each round is the previous round polynomial at its challenge."""
        composite = _random_composite(3)
        proof, challenges = prove(composite, Transcript())
        records = proof.round_records
        for i in range(1, len(records)):
            e0, e1, _ = records[i]
            assert e0 + e1 == evaluate_round_record(records[i - 1], challenges[i - 1])
        assert evaluate_round_record(records[-1], challenges[-1]) == composite.evaluate(challenges)

    def test_round_record_matches_reference(self) -> None:
        """e0, e1, e2 agree with MultilinearExtension.evaluate_at_round on the reduced polynomial."""
        composite = _random_composite(3)
        e0, e1, e2 = round_record(composite)
        reduced = composite.reduce()
        assert e0 == reduced.evaluate_at_round(0, [], FF(0))
        assert e1 == reduced.evaluate_at_round(0, [], FF(1))
        # e2 is the composite itself at 2, not the reduced MLE extended to 2
        assert e2 == field_sum(composite.bind(0, FF(2)).reduce().values)

    def test_rejects_degree_three(self) -> None:
        composite = Composite([[1, 2], [3, 4], [5, 6]], [Op.MUL, Op.MUL])
        with pytest.raises(ValueError):
            prove(composite, Transcript())

    def test_rejects_zero_variables(self) -> None:
        with pytest.raises(ValueError):
            prove(Composite([[7]], []), Transcript())


class TestSumcheckVerifier:

    @pytest.mark.parametrize("num_vars", [1, 2, 3, 4])
    def test_honest_proof_accepted(self, num_vars: int) -> None:
        composite = _random_composite(num_vars)
        proof, _ = prove(composite, Transcript())
        assert verify(composite, proof, Transcript())

    def test_challenges_match_prover(self) -> None:
        composite = _random_composite(3)
        proof, challenges = prove(composite, Transcript())
        result = verify_rounds(proof.claimed_sum, proof.round_records, Transcript())
        assert result.accepted
        assert result.challenges == challenges
        assert result.final_claim == composite.evaluate(challenges)

    def test_wrong_claimed_sum_rejected(self) -> None:
        composite = _random_composite(3)
        proof, _ = prove(composite, Transcript())
        proof.claimed_sum = proof.claimed_sum + FF(1)
        assert not verify(composite, proof, Transcript())

    @pytest.mark.parametrize("round_idx", [0, 1, 2])
    @pytest.mark.parametrize("slot", [0, 1, 2])
    def test_tampered_round_rejected(self, round_idx: int, slot: int) -> None:
        composite = _random_composite(3)
        proof, _ = prove(composite, Transcript())
        assert not verify(composite, _tampered(proof, round_idx, slot), Transcript())

    def test_linear_round_record_rejected(self) -> None:
        """A record with only two points (a line) fails the degree check."""
        composite = _random_composite(2)
        proof, _ = prove(composite, Transcript())
        proof.round_records[0] = proof.round_records[0][:2]
        result = verify_rounds(proof.claimed_sum, proof.round_records, Transcript())
        assert not result.accepted
        assert "degree" in result.reason

    def test_wrong_round_count_rejected(self) -> None:
        composite = _random_composite(3)
        proof, _ = prove(composite, Transcript())
        proof.round_records = proof.round_records[:2]
        assert not verify(composite, proof, Transcript())

    def test_different_composite_rejected(self) -> None:
        """Final oracle check catches a proof for another polynomial with the same sum."""
        composite = Composite([[1, 2, 3, 4], [5, 6, 7, 8]], [Op.MUL])
        proof, _ = prove(composite, Transcript())
        # Swapping two table entries keeps the sum but changes the polynomial
        swapped = Composite([[2, 1, 3, 4], [6, 5, 7, 8]], [Op.MUL])
        assert swapped.reduce().sum_over_hypercube() == proof.claimed_sum
        assert not verify(swapped, proof, Transcript())

    def test_transcript_mismatch_rejected(self) -> None:
        composite = _random_composite(3)
        proof, _ = prove(composite, Transcript())
        assert not verify(composite, proof, Transcript(label=b"other"))
