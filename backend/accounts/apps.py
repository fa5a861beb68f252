"""Accounts app configuration."""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """Configuration for the accounts app."""

    name = "accounts"
    verbose_name = "Accounts & Multi-tenancy"
