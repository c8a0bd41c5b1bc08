"""Artifact generators for the compiled catalog."""

from .guards_module import render_guards_module
from .permissions_module import render_permissions_module
from .roles_module import render_roles_module
from .seed_sql import render_seed_sql

__all__ = [
    "render_guards_module",
    "render_permissions_module",
    "render_roles_module",
    "render_seed_sql",
]
