"""Store app configuration."""

from django.apps import AppConfig


class StoreConfig(AppConfig):
    """In-memory entity store and demo seed data."""

    name = "store"
    verbose_name = "Entity Store"
