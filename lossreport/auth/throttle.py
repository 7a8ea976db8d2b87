import time
from collections.abc import Callable

from lossreport.config.settings import Settings


class LoginThrottle:
    """Client-side cooldown: N consecutive failures lock logins for a while."""

    def __init__(
        self,
        max_failures: int = 3,
        lockout_seconds: float = 30,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_failures = max_failures
        self._lockout_seconds = lockout_seconds
        self._clock = clock
        self._failures = 0
        self._locked_until: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "LoginThrottle":
        return cls(
            max_failures=settings.login_max_failures,
            lockout_seconds=settings.login_lockout_seconds,
        )

    @property
    def failures(self) -> int:
        return self._failures

    def is_locked(self) -> bool:
        if self._locked_until is None:
            return False
        if self._clock() >= self._locked_until:
            self._locked_until = None
            self._failures = 0
            return False
        return True

    def remaining_seconds(self) -> float:
        if not self.is_locked() or self._locked_until is None:
            return 0.0
        return self._locked_until - self._clock()

    def record_failure(self) -> None:
        self._failures += 1
        if self._failures >= self._max_failures:
            self._locked_until = self._clock() + self._lockout_seconds

    def record_success(self) -> None:
        self._failures = 0
        self._locked_until = None
