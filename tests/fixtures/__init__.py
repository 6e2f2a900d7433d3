"""Test fixtures for pharmacy tests."""

from .drug_factory import create_drugs

__all__ = ['create_drugs']
