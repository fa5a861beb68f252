"""Recruiting app configuration."""

from django.apps import AppConfig


class RecruitingConfig(AppConfig):
    """Vacancies, applicants and CV submissions."""

    name = "recruiting"
    verbose_name = "Recruiting"
