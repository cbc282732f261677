from __future__ import annotations

import logging
from io import StringIO

# ------------------------------------ Logging ---------------------------------
logger = logging.getLogger("textdirectory")
if not logging.getLogger().handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(filename)s:%(lineno)d %(levelname)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(logging.INFO)  # per-line tracing is logged at DEBUG


def get_buffer(text: str | StringIO = None) -> StringIO:
    """A StringIO over text, a new empty one for None, or the stream itself."""
    return StringIO(text) if isinstance(text, str) or text is None else text
