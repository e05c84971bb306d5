"""
UI module - Rich console interface.

Provides:
- Leveled status output ([INFO], [WARN], [ERROR], [VERBOSE], [DRY-RUN])
- Confirmation prompts
- Table / compact / JSON rendering of read results
"""

from .console import ConsoleUI
from .interaction import InteractionManager
from .display import ResultDisplay, OUTPUT_FORMATS, truncate

__all__ = [
    "ConsoleUI",
    "InteractionManager",
    "ResultDisplay",
    "OUTPUT_FORMATS",
    "truncate",
]
