from enum import Enum

from lossreport.auth.base import BaseAuthenticator
from lossreport.auth.throttle import LoginThrottle
from lossreport.logging.logger import Log


class LoginOutcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    LOCKED = "locked"


class LoginGuard:
    """Runs a login attempt through the throttle before asking the authenticator."""

    def __init__(self, authenticator: BaseAuthenticator, throttle: LoginThrottle) -> None:
        self._authenticator = authenticator
        self._throttle = throttle

    def login(self, email: str, password: str) -> LoginOutcome:
        if self._throttle.is_locked():
            Log.warning(
                "Login rejected during lockout",
                remaining=f"{self._throttle.remaining_seconds():.0f}s",
            )
            return LoginOutcome.LOCKED
        if not email.strip() or not password:
            return LoginOutcome.FAILURE
        if self._authenticator.authenticate(email.strip(), password):
            self._throttle.record_success()
            return LoginOutcome.SUCCESS
        self._throttle.record_failure()
        Log.warning("Login failed", failures=self._throttle.failures)
        return LoginOutcome.FAILURE
