"""
Script Scanner Command-Line Interface
=====================================

This package provides the command-line tool for the script scanner:

- **csclasses**: list the classes declared in script files

The tool is a Click-based CLI application with help text and
consistent exit codes (see cli.errors).
"""

__all__ = ["csclasses"]
