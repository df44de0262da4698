"""Identity Proof — simulated zero-knowledge identity verification.

Invariants:
    - Aadhar numbers must match XXXX-XXXX-XXXX (digits) before any comparison
    - Only the demo record verifies; every other well-formed number fails
    - proof = HMAC-SHA256(key, "<number>_<image_hash>") hex, in 8-char blocks joined by "-"
    - Deterministic: same inputs and key always produce the same proof

Design Decisions:
    - HMAC stands in for a real proof system; the response shape (proof, verifiedAt)
      is what a real verifier would return, so clients do not change when one lands
"""

import hashlib
import hmac
import re
from dataclasses import dataclass
from datetime import datetime, timezone

DEMO_AADHAR = "1234-5678-9012"

_AADHAR_PATTERN = re.compile(r"^\d{4}-\d{4}-\d{4}$")
_IMAGE_HASH_PATTERN = re.compile(r"^[0-9a-f]{64}$", re.IGNORECASE)
_PROOF_BLOCK = 8


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    message: str
    proof: str | None = None
    verified_at: datetime | None = None

    def to_dict(self) -> dict:
        result: dict = {"success": self.success, "message": self.message}
        if self.success:
            result["proof"] = self.proof
            result["verifiedAt"] = self.verified_at.isoformat()
        return result


def is_valid_image_hash(image_hash: str) -> bool:
    return bool(_IMAGE_HASH_PATTERN.match(image_hash))


def build_proof(aadhar_number: str, image_hash: str, key: str) -> str:
    digest = hmac.new(
        key.encode(), f"{aadhar_number}_{image_hash}".encode(), hashlib.sha256,
    ).hexdigest()
    return "-".join(
        digest[i:i + _PROOF_BLOCK] for i in range(0, len(digest), _PROOF_BLOCK)
    )


def verify_identity(
    aadhar_number: str, image_hash: str, key: str,
) -> VerificationResult:
    """Check the identity number against the demo record and issue a proof."""
    if not _AADHAR_PATTERN.match(aadhar_number):
        return VerificationResult(
            success=False,
            message="Invalid Aadhar format. Must be XXXX-XXXX-XXXX",
        )
    if aadhar_number != DEMO_AADHAR:
        return VerificationResult(
            success=False,
            message="Verification failed. The provided Aadhar doesn't match our records",
        )
    return VerificationResult(
        success=True,
        message="Identity verified successfully using zero-knowledge proof",
        proof=build_proof(aadhar_number, image_hash, key),
        verified_at=datetime.now(timezone.utc),
    )
