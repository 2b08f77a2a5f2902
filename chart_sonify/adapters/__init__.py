"""
Adapters - Outer surfaces over the Sonifier.

Components:
    main - Command-line interface (chart-sonify)
"""

from chart_sonify.adapters.cli import main

__all__ = ["main"]
