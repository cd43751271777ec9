"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the verbosity of the
currently connected expander without requiring explicit state passing.

Features:
- Context-aware logging tied to the expander's verbosity
- Rich formatting with timestamps, colors, and metadata
- Thread-safe using contextvars
- Works throughout lib modules without passing state

Usage:
    from lib.log import LOG, WARN, state_connectToLogger

    # At start of an expansion call:
    state_connectToLogger(expander)

    # Anywhere in that context:
    LOG("Loaded: partials/header.html", level=1)
    LOG("Slot map: ['default', 'footer']", level=3)
    WARN("Skipping (extension not allowed): logo.png")
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold whatever object carries the current verbosity
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Configure loguru with htmlinclude-specific format
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <7}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a verbosity carrier to the logging context.

    Call this at the start of each expansion call to make the expander's
    verbosity setting available to LOG() calls throughout that context.

    Args:
        state: Any object with a verbosity attribute (usually IncludeExpander)
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata (e.g., exc_info=True for exceptions)

    Verbosity levels:
        0 = Quiet (warnings only)
        1 = Normal output (default)
        2 = Verbose
        3 = Debug
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)


def WARN(message: str) -> None:
    """Emit a warning regardless of verbosity"""
    logger.opt(depth=1).warning(message)
