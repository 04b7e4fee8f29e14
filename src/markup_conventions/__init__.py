"""
Markup Conventions - Render author-written game text with styled markup.

This package provides tools for:
- Defining built-in and custom markup conventions (delimiter pairs + styles)
- Detecting delimiter pairs and conflicts while authoring
- Parsing game text into sanitized, styled HTML spans
"""

__version__ = "0.1.0"
