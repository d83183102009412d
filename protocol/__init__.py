"""Protocol - Sum-check and GKR proving/verification."""

from protocol.circuit import Circuit, Gate, GateOp
from protocol.config import GkrConfig
from protocol.expressions import Composite, Op
from protocol.sumcheck import SumcheckProof, SumcheckVerification

from protocol.prover import generate_proof

from protocol.verifier import verify_proof

from protocol.proof import (
    GKRProof,
    load_proof_from_json,
    proof_from_bytes,
    proof_from_json,
    proof_to_bytes,
    proof_to_json,
)

__all__ = [
    # Circuit
    "Circuit",
    "Gate",
    "GateOp",
    # Configuration
    "GkrConfig",
    # Composite expressions
    "Composite",
    "Op",
    # Sum-check
    "SumcheckProof",
    "SumcheckVerification",
    # GKR
    "generate_proof",
    "verify_proof",
    "GKRProof",
    "proof_to_json",
    "proof_from_json",
    "load_proof_from_json",
    "proof_to_bytes",
    "proof_from_bytes",
]
