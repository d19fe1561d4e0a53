"""Antlion — evaluate Python expressions in disposable project sandboxes."""

from antlion.errors import (
    BackendError,
    DependencyError,
    ExecutionError,
    ParseError,
    ProvisioningError,
    SandboxError,
)
from antlion.sandbox import Provisioner, Sandbox

__version__ = "0.1.0"

__all__ = [
    "BackendError",
    "DependencyError",
    "ExecutionError",
    "ParseError",
    "Provisioner",
    "ProvisioningError",
    "Sandbox",
    "SandboxError",
]
