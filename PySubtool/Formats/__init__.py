"""
PySubtool.Formats - Format-specific file handlers

Each module converts between one subtitle format's text syntax and the Subtitles model.
"""

# Explicitly import all format handler modules to ensure they're registered
# This is required for pip-installed packages where dynamic discovery may fail
from . import SrtFileHandler
from . import VttFileHandler
