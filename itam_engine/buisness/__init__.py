"""
Domain layer for the asset identity and lifecycle engine.
Contains normalization, duplicate detection, validation and lifecycle rules
separated from persistence and transport concerns.
"""
