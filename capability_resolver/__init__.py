"""Derived configuration resolution for Gardener cloud profiles and shoots."""

__version__ = "0.1.0"
