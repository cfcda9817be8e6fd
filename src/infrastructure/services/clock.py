from datetime import datetime, timezone

from src.domain.interfaces.services import IClock


class SystemClock(IClock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
