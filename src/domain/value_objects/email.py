"""A Value Object representing an email address in the domain.

This class encapsulates the normalization and validation rules of an email
address, ensuring that any email in the domain is always in a valid state. As
a Value Object, it is immutable, and equality is based on its value.
"""

import re
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class Email:
    """An immutable, self-validating email address.

    This Value Object enforces several business rules upon instantiation:
    - Is automatically trimmed and normalized to lowercase.
    - Conforms to a basic ``local@domain.tld`` format.
    - Has a reasonable length.

    Attributes:
        value: The normalized string representation of the email address.
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 254
    EMAIL_PATTERN: ClassVar[re.Pattern] = re.compile(
        r"^[a-zA-Z0-9._%+'-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
    )

    def __post_init__(self):
        """Performs validation and normalization after initialization."""
        if not isinstance(self.value, str):
            raise TypeError("Email value must be a string.")

        normalized_value = self.value.strip().lower()
        object.__setattr__(self, "value", normalized_value)

        if not normalized_value or len(normalized_value) > self.MAX_LENGTH:
            raise ValueError(f"Email length must be between 1 and {self.MAX_LENGTH} characters.")
        if not self.EMAIL_PATTERN.match(normalized_value):
            raise ValueError("Invalid email format.")

    @property
    def domain(self) -> str:
        """Returns the domain part of the email address."""
        return self.value.split("@")[1]

    def mask_for_logging(self) -> str:
        """Returns a masked version of the email for safe logging.

        Example: 'us**@e*****.com'
        """
        local, domain_part = self.value.split("@")
        masked_local = f"{local[:2]}{'*' * max(len(local) - 2, 0)}"
        masked_domain = f"{domain_part[:1]}{'*' * max(len(domain_part) - 2, 0)}{domain_part[-1:]}"
        return f"{masked_local}@{masked_domain}"

    def __str__(self) -> str:
        return self.value


def mask_email(raw: str) -> str:
    """Masks an arbitrary (possibly invalid) email string for logging."""
    try:
        return Email(raw).mask_for_logging()
    except (TypeError, ValueError):
        return "***"
