"""Domain Interfaces for dependency inversion.

These interfaces define contracts that infrastructure and application
layers must implement, keeping the domain free of database, crypto and
mail transport details.
"""

from .email import EmailResult, IEmailSender, IPasswordResetEmailRenderer, RenderedEmail
from .repositories import IPasswordResetTokenRepository, IUserRepository
from .services import (
    IClock,
    IPasswordHasher,
    ITokenService,
    IUnitOfWork,
    UnitOfWorkFactory,
)

__all__ = [
    "EmailResult",
    "IClock",
    "IEmailSender",
    "IPasswordResetEmailRenderer",
    "IPasswordHasher",
    "IPasswordResetTokenRepository",
    "ITokenService",
    "IUnitOfWork",
    "IUserRepository",
    "RenderedEmail",
    "UnitOfWorkFactory",
]
