"""
One-time passcodes for email verification
"""

import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Dict

from realty_crm.config import config_manager
from realty_crm.exceptions import DataValidationError
from realty_crm.utils import validate_email

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3


@dataclass
class PendingCode:
    code: str
    expires_at: float
    attempts: int = 0


class OTPService:
    """In-memory OTP store keyed by email.

    Codes are single use and expire after OTP_TTL_SECONDS. A code is dropped
    after MAX_ATTEMPTS wrong guesses. Delivery is a log line; no mail
    transport is configured.
    """

    def __init__(self, ttl_seconds: int = None, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds or config_manager.get_app_config('OTP_TTL_SECONDS', 300)
        self.clock = clock
        self._codes: Dict[str, PendingCode] = {}
        self._lock = threading.Lock()

    def send_otp(self, email: str) -> str:
        email = (email or '').strip().lower()
        if not validate_email(email):
            raise DataValidationError("Please enter a valid email address.", 'email', email)

        code = f"{secrets.randbelow(1000000):06d}"
        with self._lock:
            self._purge_expired()
            self._codes[email] = PendingCode(code, self.clock() + self.ttl_seconds)

        logger.info(f"OTP for {email}: {code}")
        return code

    def verify_otp(self, email: str, code: str) -> bool:
        email = (email or '').strip().lower()
        with self._lock:
            pending = self._codes.get(email)
            if pending is None:
                return False
            if self.clock() > pending.expires_at:
                del self._codes[email]
                return False
            if not secrets.compare_digest(pending.code, str(code or '').strip()):
                pending.attempts += 1
                if pending.attempts >= MAX_ATTEMPTS:
                    logger.warning(f"OTP for {email} discarded after {pending.attempts} failed attempts")
                    del self._codes[email]
                return False
            del self._codes[email]
        return True

    def _purge_expired(self):
        now = self.clock()
        for email in [e for e, pending in self._codes.items() if now > pending.expires_at]:
            del self._codes[email]


# Shared store for the running process
otp_service = OTPService()
