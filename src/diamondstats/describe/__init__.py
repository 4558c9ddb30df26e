"""Narrative player descriptions built from career statistics."""

from .narrative import (
    average_tier,
    build_description,
    contact_profile,
    discipline_profile,
    generate_description,
    hits_tier,
    home_run_tier,
    indefinite_article,
    power_profile,
    speed_profile,
)

__all__ = [
    "average_tier",
    "build_description",
    "contact_profile",
    "discipline_profile",
    "generate_description",
    "hits_tier",
    "home_run_tier",
    "indefinite_article",
    "power_profile",
    "speed_profile",
]
