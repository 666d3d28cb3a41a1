"""Context variables for routing non-blocking file operations.

Non-blocking reads and writes are run on a ``concurrent.futures``
executor. By default a shared thread pool is used; ``use_executor``
swaps in a caller-owned executor for the current context.
"""

import contextvars
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import contextmanager
from typing import Iterator

# Context variable holding an executor chosen by the caller
_current_executor: contextvars.ContextVar[Executor | None] = contextvars.ContextVar(
    "to_vfile_current_executor", default=None
)

_default_executor: ThreadPoolExecutor | None = None
_default_lock = threading.Lock()


def _get_default_executor() -> ThreadPoolExecutor:
    global _default_executor
    with _default_lock:
        if _default_executor is None:
            _default_executor = ThreadPoolExecutor(thread_name_prefix="to_vfile")
        return _default_executor


def current_executor() -> Executor:
    """Return the executor non-blocking operations use in this context."""
    return _current_executor.get() or _get_default_executor()


@contextmanager
def use_executor(executor: Executor) -> Iterator[Executor]:
    """Run non-blocking operations started in this block on ``executor``.

    The executor is not shut down on exit; its owner stays responsible
    for it.

    Example::

        with ThreadPoolExecutor(max_workers=1) as pool:
            with use_executor(pool):
                future = read("notes.txt")
            file = future.result()
    """
    token = _current_executor.set(executor)
    try:
        yield executor
    finally:
        _current_executor.reset(token)
