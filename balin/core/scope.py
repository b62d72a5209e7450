"""
Scoped acquisition with guaranteed restoration.

Every context switch (alert, frame, window) follows the same shape:

    Outside -> Entering -> InsideBody -> Restoring -> Outside

`restore` runs on every exit path, including a failing `enter`, in which
case it receives None. Failures from the body propagate once restoration
has completed. If `restore` itself raises, that error propagates and the
body failure is kept as its ``__context__``.
"""
# @file purpose: Provide the generic context scope used by the browser helpers.

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

logger = logging.getLogger(__name__)

H = TypeVar("H")
R = TypeVar("R")


@contextmanager
def context_scope(
    enter: Callable[[], H],
    restore: Callable[[Optional[H]], None],
    *,
    name: str = "scope",
) -> Iterator[H]:
    handle: Optional[H] = None
    try:
        handle = enter()
        logger.debug(f"Entered {name}: {handle!r}")
        yield handle
    except Exception as e:
        logger.warning(f"Leaving {name} after failure: {e!r}")
        raise
    finally:
        logger.debug(f"Restoring from {name}")
        restore(handle)


def with_scope(
    enter: Callable[[], H],
    body: Callable[[H], R],
    restore: Callable[[Optional[H]], None],
    *,
    name: str = "scope",
) -> R:
    """Higher-order form of `context_scope`: run ``body`` inside the scope."""
    with context_scope(enter, restore, name=name) as handle:
        return body(handle)
