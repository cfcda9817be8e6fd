"""Password Value Object for domain modeling.

Encapsulates the password strength policy so registration and reset-confirm
enforce exactly the same rules.
"""

import re
from dataclasses import dataclass
from typing import ClassVar, List


@dataclass(frozen=True)
class Password:
    """Password value object that enforces the strength policy.

    Validates on construction (fail fast). The raw value never leaves the
    object except to be hashed.

    Security Requirements:
        - Minimum 8 characters
        - Maximum 128 characters
        - At least one uppercase letter
        - At least one lowercase letter
        - At least one digit

    Attributes:
        value: The raw password string (immutable)
    """

    value: str

    MIN_LENGTH: ClassVar[int] = 8
    MAX_LENGTH: ClassVar[int] = 128

    def __post_init__(self) -> None:
        problems = self.policy_violations(self.value)
        if problems:
            raise ValueError(problems[0])

    @classmethod
    def policy_violations(cls, value: str) -> List[str]:
        """Returns every policy rule ``value`` breaks, in a stable order."""
        if not isinstance(value, str) or not value:
            return ["Password cannot be empty"]

        problems: List[str] = []
        if len(value) < cls.MIN_LENGTH:
            problems.append(f"Password must be at least {cls.MIN_LENGTH} characters long")
        if len(value) > cls.MAX_LENGTH:
            problems.append(f"Password must not exceed {cls.MAX_LENGTH} characters")
        if not re.search(r"[A-Z]", value):
            problems.append("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", value):
            problems.append("Password must contain at least one lowercase letter")
        if not re.search(r"[0-9]", value):
            problems.append("Password must contain at least one number")
        return problems

    def __str__(self) -> str:
        return "********"

    def __repr__(self) -> str:
        return "Password(value='********')"
