# events/apps.py
"""Events app configuration."""

from django.apps import AppConfig


class EventsConfig(AppConfig):
    """Configuration for the events app."""

    name = "events"
    verbose_name = "Business Events"
