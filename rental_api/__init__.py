"""Rental listings service with a moderated flat lifecycle."""

__version__ = "0.1.0"
