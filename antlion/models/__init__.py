"""Shared data models for Antlion."""

from antlion.models.schemas import CommandResult, DependencySpec

__all__ = ["CommandResult", "DependencySpec"]
