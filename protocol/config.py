"""GKR protocol parameters."""

from dataclasses import dataclass

from primitives.transcript import Transcript


@dataclass
class GkrConfig:
    """Parameters shared by prover and verifier.

    Attributes:
        hash_name: Hash oracle backing the Fiat-Shamir transcript
        label: Domain-separation bytes absorbed when a transcript is created
        min_layer_vars: Minimum variable count of a layer MLE (a 1-gate layer
                        is padded to 2 values so it still has one variable)
    """
    hash_name: str = "keccak256"
    label: bytes = b""
    min_layer_vars: int = 1

    def __post_init__(self):
        # A layer with zero variables leaves sum-check nothing to bind
        if self.min_layer_vars < 1:
            raise ValueError(f"min_layer_vars must be >= 1, got {self.min_layer_vars}")

    def new_transcript(self) -> Transcript:
        """Fresh transcript for one proving or verifying session."""
        return Transcript(hash_name=self.hash_name, label=self.label)
