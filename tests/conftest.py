"""Pytest fixtures and configuration."""

import pytest


@pytest.fixture
def organizers():
    """Organizer records as returned by the admin listing."""
    return [
        {"organizerName": "Robotics Club", "email": "robotics@fest.in", "category": "Technical"},
        {"organizerName": "Dance Crew", "email": "dance@fest.in", "category": "Cultural"},
        {"organizerName": "Quiz Society", "email": "quiz@fest.in", "category": "Literary"},
    ]


@pytest.fixture
def events():
    """Event records with embedded organizers."""
    return [
        {
            "name": "Hackathon",
            "venue": "Lab 3",
            "organizer": {"organizerName": "Coding Club"},
        },
        {
            "name": "Battle of Bands",
            "venue": "Main Stage",
            "organizer": None,
        },
    ]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove FEST_SEARCH_* settings from the environment."""
    for name in (
        "FEST_SEARCH_CONFIG_PATH",
        "FEST_SEARCH_DISTANCE_RATIO",
        "FEST_SEARCH_MIN_DISTANCE",
        "FEST_SEARCH_PORT",
        "FEST_SEARCH_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
