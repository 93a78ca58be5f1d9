from datetime import datetime, timezone


class Clock:
    """Source of "now" and of today's challenge partition key (UTC)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> str:
        return self.now().date().isoformat()


class FixedClock(Clock):
    """Clock pinned to a given instant; used by scripts and tests."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


def iso_now(clock: Clock) -> str:
    return clock.now().isoformat().replace("+00:00", "Z")
