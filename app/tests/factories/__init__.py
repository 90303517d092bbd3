"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_i18n_settings,
    make_locale,
    make_policy,
    make_resolver,
)

__all__ = [
    "make_i18n_settings",
    "make_locale",
    "make_policy",
    "make_resolver",
]
