"""Input guards shared by the domain services.

The HTTP layer already validates request bodies, but the services are also
called directly (tests, scripts), so they re-check the same rules and raise
``ValidationError`` with field-level details.
"""

from src.core.exceptions import ValidationError
from src.domain.value_objects.email import Email
from src.domain.value_objects.password import Password


def validated_email(value: str, field: str = "email") -> Email:
    try:
        return Email(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(details=[{"field": field, "message": str(e)}]) from e


def validated_password(value: str, field: str = "password") -> Password:
    problems = Password.policy_violations(value)
    if problems:
        raise ValidationError(
            details=[{"field": field, "message": problem} for problem in problems]
        )
    return Password(value)
