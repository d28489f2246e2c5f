"""Injectable clock.

Services never read the system clock directly; they receive a ``Clock``
so tests can pin "now".
"""

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def get_clock() -> Clock:
    """Dependency returning the wall clock."""
    return utc_now
