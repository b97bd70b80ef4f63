"""
Centralized logging using Loguru with context-aware verbosity.

Processors deep inside the rendering pipeline (snippet imports, callout
lookups, code block pairing) report through LOG() without having the
CLI's ProgramState handed to them. The state is published once through a
ContextVar and its verbosity gates every message.

Usage:
    from docdown.lib.log import LOG, state_connectToLogger

    # At start of pipeline function:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Rendered guide/intro.md", level=1)
    LOG("Snippet region 'setup' resolved", level=2)
    LOG("Stashed raw block DOCDOWNRAWBLOCK3ENDRAW", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState (or anything with .verbosity)
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<magenta>{module: <12}</magenta> "
    "<cyan>{function: <22}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Publish a state object to the logging context.

    Args:
        state: Object with an integer ``verbosity`` attribute, normally the
            CLI's ProgramState

    Example:
        def site_build(inputstate: ProgramState) -> ProgramState:
            state = inputstate.copy()
            state_connectToLogger(state)
            LOG("Building site...", level=1)
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when nothing is connected"""
    state = _program_state.get()
    return getattr(state, 'verbosity', 0) if state is not None else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Library callers that never connect a state (tests, embedding code)
    get silence rather than noise.
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
