"""Error handling for optional pipeline steps.

A photo provider call is optional work: its failure must degrade to "no
candidates" instead of aborting the recipe. Unexpected errors in the rest of
the pipeline propagate to the batch runner, which records them per recipe.
"""

import logging
from typing import Any, Awaitable, Dict, Optional

from recipe_photos.utils.logger import logger

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


async def safe_execute_async(
    coro: Awaitable,
    operation_name: str,
    log_level: str = "warning",
    default_return: Any = None,
    extra: Optional[Dict[str, Any]] = None,
) -> Any:
    """Await `coro`, logging and swallowing any exception.

    Args:
        coro: Awaitable to execute.
        operation_name: Description for logging (e.g., "unsplash search failed for 'pesto'").
        log_level: "debug", "warning" or "error". Unknown values log as warning.
        default_return: Value returned when the awaitable raises.
        extra: Pipeline context attached to the log record (see log_context).

    Returns:
        The awaitable's result, or default_return on exception.

    Example:
        data = await safe_execute_async(self._fetch_json(query), "pexels search failed")
        # data is None if the request raised
    """
    try:
        return await coro
    except Exception as e:
        level = _LOG_LEVELS.get(log_level, logging.WARNING)
        logger.log(level, f"{operation_name}: {type(e).__name__}: {e}", extra=extra)
        return default_return
