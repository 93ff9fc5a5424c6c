"""Utility modules for nmsweep.

This module exports commonly used utility functions.
"""

from nmsweep.utils.formatting import (
    apply_theme,
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "apply_theme",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
