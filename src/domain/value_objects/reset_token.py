"""Reset Token Value Object.

Pairs the raw password reset token (sent to the user, never stored) with its
deterministic hash (stored, never sent).
"""

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class ResetToken:
    """Raw reset token and the hash it is stored under.

    Attributes:
        raw: 128 hex characters drawn from 64 bytes of OS randomness.
        token_hash: SHA-256 hex digest of ``raw``.
    """

    raw: str
    token_hash: str

    ENTROPY_BYTES: ClassVar[int] = 64

    def __post_init__(self) -> None:
        if not self.raw:
            raise ValueError("Reset token cannot be empty")
        if not self.token_hash or len(self.token_hash) != 64:
            raise ValueError("Reset token hash must be a SHA-256 hex digest")

    def mask_for_logging(self) -> str:
        return f"{self.raw[:6]}..."

    def __repr__(self) -> str:
        return f"ResetToken(raw='{self.mask_for_logging()}')"
