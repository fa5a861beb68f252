"""Ops app configuration."""

from django.apps import AppConfig


class OpsConfig(AppConfig):
    """Operations & observability (logging configuration)."""

    name = "ops"
    verbose_name = "Operations"
