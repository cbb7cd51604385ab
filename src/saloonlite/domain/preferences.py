"""Preferences and app settings domain service."""

from dataclasses import fields, replace

from saloonlite.database.base import Database
from saloonlite.domain.entities import AppSettings, UserPreferences
from saloonlite.domain.errors import ValidationError

THEMES = ("light", "dark")


class PreferencesService:
    """Service for the singleton preference and settings records."""

    def __init__(self, db: Database):
        """Initialize preferences service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_preferences(self) -> UserPreferences:
        """Get preferences, or the defaults if none were saved."""
        return self.db.get_user_preferences()

    def update_preferences(self, **changes) -> UserPreferences:
        """Update selected preference fields.

        Raises:
            ValidationError: If a field is unknown or a value is invalid
        """
        known = {f.name for f in fields(UserPreferences)} - {"id"}
        unknown = set(changes) - known
        if unknown:
            raise ValidationError(f"Unknown preference(s): {', '.join(sorted(unknown))}")

        if "theme" in changes and changes["theme"] not in THEMES:
            raise ValidationError(f"Theme must be one of: {', '.join(THEMES)}")
        for key in ("currency", "business_name", "business_type"):
            if key in changes:
                changes[key] = (changes[key] or "").strip()
                if not changes[key]:
                    raise ValidationError(f"{key.replace('_', ' ').capitalize()} cannot be empty")
        if "default_categories" in changes:
            changes["default_categories"] = tuple(
                c.strip() for c in changes["default_categories"] if c and c.strip()
            )

        preferences = replace(self.db.get_user_preferences(), **changes)
        self.db.save_user_preferences(preferences)
        return preferences

    def get_app_settings(self) -> AppSettings:
        """Get app settings, or the defaults if none were saved."""
        return self.db.get_app_settings()

    def complete_onboarding(self) -> AppSettings:
        """Mark first launch and onboarding as done."""
        settings = replace(self.db.get_app_settings(), first_launch=False, onboarding_completed=True)
        self.db.save_app_settings(settings)
        return settings
