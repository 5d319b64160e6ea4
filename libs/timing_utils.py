from typing import Optional
import contextlib
import time as time_stdlib

import structlog

_logger = structlog.get_logger()


@contextlib.contextmanager
def time(description: Optional[str] = None, **logging_args):
    """Logs the wall time spent in the body of the `with` statement."""
    start = time_stdlib.time()
    yield
    elapsed = time_stdlib.time() - start
    _logger.info(f"Elapsed: {elapsed:.1f}s", description=description, **logging_args)
