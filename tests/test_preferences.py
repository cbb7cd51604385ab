"""Tests for preferences and app settings."""

import pytest

from saloonlite.domain.entities import AppSettings, UserPreferences
from saloonlite.domain.errors import ValidationError


def test_defaults(preferences_service):
    prefs = preferences_service.get_preferences()

    assert prefs == UserPreferences()
    assert prefs.currency == "GHS"
    assert prefs.default_categories == ("Haircut", "Beard Trim", "Hair Color", "Styling")
    assert preferences_service.get_app_settings() == AppSettings()


def test_update_preferences(preferences_service):
    preferences_service.update_preferences(business_name=" Fresh Cuts ", theme="dark")

    prefs = preferences_service.get_preferences()
    assert prefs.business_name == "Fresh Cuts"
    assert prefs.theme == "dark"
    assert prefs.currency == "GHS"


def test_update_categories_drops_blank_entries(preferences_service):
    prefs = preferences_service.update_preferences(default_categories=["Fade", " ", "Shave "])
    assert prefs.default_categories == ("Fade", "Shave")


@pytest.mark.parametrize(
    "changes",
    [{"theme": "blue"}, {"currency": "  "}, {"business_name": ""}, {"favourite_color": "red"}],
)
def test_update_rejects_invalid_values(preferences_service, changes):
    with pytest.raises(ValidationError):
        preferences_service.update_preferences(**changes)
    assert preferences_service.get_preferences() == UserPreferences()


def test_complete_onboarding(preferences_service):
    preferences_service.complete_onboarding()

    settings = preferences_service.get_app_settings()
    assert not settings.first_launch
    assert settings.onboarding_completed
