"""Sandbox lifecycle: provisioning, dependency installs, serialized evaluations.

Components:
- provisioner: create a uniquely-named workspace and scaffold a project
- installer:   add dependencies to the manifest, one at a time
- executor:    wrap an expression, build-and-run it, parse the output
- guard:       one exclusive lock per workspace
"""

from antlion.sandbox.executor import OUTPUT_FILE, evaluate, parse_output
from antlion.sandbox.guard import WorkspaceGuard
from antlion.sandbox.installer import install
from antlion.sandbox.provisioner import PROJECT_NAME, Provisioner
from antlion.sandbox.workspace import Sandbox

__all__ = [
    "OUTPUT_FILE",
    "PROJECT_NAME",
    "Provisioner",
    "Sandbox",
    "WorkspaceGuard",
    "evaluate",
    "install",
    "parse_output",
]
