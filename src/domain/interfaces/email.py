"""Email delivery interface.

The domain only needs to hand a rendered message to some transport and learn
whether it was accepted. Transports never raise; failures are reported in the
returned `EmailResult` so a broken mail server cannot change what a caller of
the password reset flow observes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EmailResult:
    """Outcome of a single delivery attempt.

    Attributes:
        success: Whether the transport accepted the message.
        message_id: Transport-assigned identifier, when one exists.
        error: Short description of the failure, when ``success`` is false.
    """

    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class IEmailSender(ABC):
    """Outbound email transport."""

    @abstractmethod
    async def send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> EmailResult:
        """Send one message.

        Args:
            to_address: Recipient address.
            subject: Subject line.
            html_body: HTML alternative.
            text_body: Plain text alternative.

        Returns:
            EmailResult: Never raises; delivery errors are captured here.
        """
        raise NotImplementedError


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html_body: str
    text_body: str


class IPasswordResetEmailRenderer(ABC):
    """Builds the password reset message around a raw token."""

    @abstractmethod
    def render(self, raw_token: str) -> RenderedEmail:
        raise NotImplementedError
