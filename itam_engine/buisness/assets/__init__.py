"""
Assets domain layer.

Subpackages are imported directly (normalization, duplicates, validation,
lifecycle); the data layer depends on errors defined here, so nothing is
imported eagerly.
"""
