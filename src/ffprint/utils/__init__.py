"""Utility functions for ffprint."""

from ffprint.models.file import format_size

from .deps import check_system_dependencies, print_dependency_status

__all__ = [
    # Formatting
    "format_size",
    # Dependency checking
    "check_system_dependencies",
    "print_dependency_status",
]
