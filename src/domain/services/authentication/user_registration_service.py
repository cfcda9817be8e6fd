"""User Registration Domain Service.

This service handles user registration operations following Domain-Driven Design
principles and single responsibility principle.
"""

import structlog

from src.core.exceptions import DuplicateEmailError
from src.domain.entities.user import User
from src.domain.interfaces.services import IClock, IPasswordHasher, UnitOfWorkFactory
from src.domain.services.validation import validated_email, validated_password

logger = structlog.get_logger(__name__)


class UserRegistrationService:
    """Domain service for user registration operations.

    Duplicate emails are rejected twice: first by a lookup that gives a fast,
    friendly error, then by the database unique constraint, which is what
    actually guarantees that two concurrent registrations for the same email
    cannot both succeed. The repository translates the constraint violation
    into the same ``DuplicateEmailError``.

    The bcrypt hash is computed between the two transactions so no connection
    is held while it runs.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        password_hasher: IPasswordHasher,
        clock: IClock,
    ):
        self._uow_factory = unit_of_work_factory
        self._password_hasher = password_hasher
        self._clock = clock

    async def register(self, email: str, password: str) -> User:
        """Register a new user.

        Args:
            email: Email address; trimmed and lowercased before use.
            password: Plain password; must satisfy the strength policy.

        Returns:
            User: The persisted user. Callers serialize only ``id`` and ``email``.

        Raises:
            ValidationError: If the email or password is malformed.
            DuplicateEmailError: If the email is already registered.
            DatabaseError: For any other storage failure.
        """
        email_vo = validated_email(email)
        password_vo = validated_password(password)

        logger.info("User registration started", email=email_vo.mask_for_logging())

        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email_vo.value) is not None:
                logger.warning(
                    "Registration failed - email already exists",
                    email=email_vo.mask_for_logging(),
                )
                raise DuplicateEmailError()

        password_hash = await self._password_hasher.hash(password_vo.value)
        now = self._clock.now()

        async with self._uow_factory() as uow:
            user = User(
                email=email_vo.value,
                password_hash=password_hash,
                created_at=now,
                updated_at=now,
            )
            await uow.users.add(user)
            await uow.commit()

        logger.info(
            "User registration successful",
            user_id=user.id,
            email=email_vo.mask_for_logging(),
        )
        return user
