"""
Universal data widget - chart, media, gaming and news data as home-screen widgets
"""

__version__ = "0.1.0"

from .controller import Outcome, UniversalWidget, WidgetRun

__all__ = ["UniversalWidget", "WidgetRun", "Outcome"]
