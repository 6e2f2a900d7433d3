"""Data models for the pharmacy benefit tracker."""

from .drug import Drug, DrugRecord

__all__ = [
    "Drug",
    "DrugRecord",
]
