"""Shared helpers."""

from .logger import get_logger
from .sizes import parse_size, max_size

__all__ = ["get_logger", "parse_size", "max_size"]
