"""
Utilities package for the Black Duck report tool.

This package contains the Markdown document model, the report renderer,
CI output publishing, and error handling.
"""

from .error_handling import format_and_print_error, handler_error_wrapper
from .action_outputs import write_action_output
from .report_renderer import render_console, render_document, format_duration

__all__ = [
    # Error handling
    'format_and_print_error',
    'handler_error_wrapper',
    # CI outputs
    'write_action_output',
    # Rendering
    'render_console',
    'render_document',
    'format_duration',
]
