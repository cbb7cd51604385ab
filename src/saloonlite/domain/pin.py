"""PIN verification and management."""

import logging
import math
import re
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from saloonlite.database.base import Database
from saloonlite.domain.entities import PinSettings, PinVerification
from saloonlite.domain.errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_PIN = "4321"
PIN_LENGTH = 4
MAX_ATTEMPTS = 3
LOCKOUT_DURATION = timedelta(minutes=5)

COMMON_PINS = {"1234", "1111", "0000", "2222", "3333", "4444", "5555", "6666", "7777", "8888", "9999"}


def is_weak_pin(pin: str) -> bool:
    """Check for sequential, repeated or common PINs."""
    if pin in "0123456789" or pin in "9876543210":
        return True
    if re.fullmatch(r"(\d)\1{3}", pin):
        return True
    return pin in COMMON_PINS


class PinService:
    """Service for the PIN that gates entry to the app.

    The PIN is stored and compared in plain text. Until a PIN is saved the
    default PIN applies.
    """

    def __init__(self, db: Database):
        """Initialize PIN service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_settings(self) -> Optional[PinSettings]:
        """Get the stored PIN settings, or None if the default PIN is in use."""
        return self.db.get_pin_settings()

    def current_pin(self) -> str:
        """The PIN that currently unlocks the app."""
        settings = self.db.get_pin_settings()
        return settings.pin if settings else DEFAULT_PIN

    def is_locked(self, now: Optional[datetime] = None) -> bool:
        """Whether entry is locked out at the given time."""
        settings = self.db.get_pin_settings()
        now = now or datetime.now()
        return settings is not None and settings.lock_until is not None and now < settings.lock_until

    def verify_pin(self, pin: str, now: Optional[datetime] = None) -> PinVerification:
        """Check a PIN entry attempt and update lockout bookkeeping.

        While locked out, attempts are rejected without being counted.

        Args:
            pin: The entered PIN
            now: Time of the attempt, defaults to now

        Returns:
            PinVerification describing the outcome
        """
        now = now or datetime.now()
        settings = self.db.get_pin_settings()

        if settings is not None and settings.lock_until is not None and now < settings.lock_until:
            minutes_left = math.ceil((settings.lock_until - now).total_seconds() / 60)
            return PinVerification(
                success=False,
                locked=True,
                remaining_attempts=0,
                lock_until=settings.lock_until,
                message=f"Account locked. Try again in {minutes_left} minute(s).",
            )

        expected = settings.pin if settings else DEFAULT_PIN
        if pin == expected:
            if settings is not None:
                self.db.save_pin_settings(
                    replace(
                        settings,
                        failed_attempts=0,
                        last_attempt=now,
                        lock_until=None,
                        is_locked=False,
                    )
                )
            return PinVerification(
                success=True,
                locked=False,
                remaining_attempts=MAX_ATTEMPTS,
                lock_until=None,
                message="Login successful!",
            )

        return self._record_failed_attempt(settings, now)

    def _record_failed_attempt(self, settings: Optional[PinSettings], now: datetime) -> PinVerification:
        # An expired lockout starts a fresh count
        previous = settings.failed_attempts if settings and settings.lock_until is None else 0
        failed_attempts = previous + 1
        locked = failed_attempts >= MAX_ATTEMPTS
        lock_until = now + LOCKOUT_DURATION if locked else None

        self.db.save_pin_settings(
            PinSettings(
                pin=settings.pin if settings else DEFAULT_PIN,
                is_enabled=True,
                created_at=settings.created_at if settings else now,
                last_modified=now,
                failed_attempts=failed_attempts,
                last_attempt=now,
                lock_until=lock_until,
                is_locked=locked,
            )
        )

        if locked:
            minutes = int(LOCKOUT_DURATION.total_seconds() // 60)
            logger.warning("PIN locked until %s after %d failed attempts", lock_until, failed_attempts)
            message = f"Too many failed attempts. Account locked for {minutes} minutes."
        else:
            message = f"Incorrect PIN. {MAX_ATTEMPTS - failed_attempts} attempt(s) remaining."

        return PinVerification(
            success=False,
            locked=locked,
            remaining_attempts=max(MAX_ATTEMPTS - failed_attempts, 0),
            lock_until=lock_until,
            message=message,
        )

    def change_pin(
        self,
        current_pin: str,
        new_pin: str,
        confirm_pin: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PinSettings:
        """Replace the PIN.

        Args:
            current_pin: The PIN in use (the default PIN if none was saved)
            new_pin: Four digits, not weak, different from the current PIN
            confirm_pin: Must equal new_pin when given

        Returns:
            The saved PinSettings

        Raises:
            ValidationError: If any check fails
        """
        now = now or datetime.now()
        existing = self.db.get_pin_settings()
        expected = existing.pin if existing else DEFAULT_PIN

        if current_pin != expected:
            raise ValidationError("Incorrect current PIN")
        if len(new_pin) != PIN_LENGTH or not new_pin.isdigit():
            raise ValidationError(f"PIN must be {PIN_LENGTH} digits")
        if is_weak_pin(new_pin):
            raise ValidationError("PIN is too easy to guess; avoid sequences, repeated digits and common PINs")
        if new_pin == expected:
            raise ValidationError("New PIN cannot be same as current PIN")
        if confirm_pin is not None and confirm_pin != new_pin:
            raise ValidationError("PINs do not match")

        settings = PinSettings(
            pin=new_pin,
            is_enabled=True,
            created_at=existing.created_at if existing else now,
            last_modified=now,
            failed_attempts=0,
            last_attempt=now,
            lock_until=None,
            is_locked=False,
        )
        self.db.save_pin_settings(settings)
        logger.info("PIN changed")
        return settings
