"""Pharmacy catalogue management."""

from .registry import Pharmacy

__all__ = ["Pharmacy"]
