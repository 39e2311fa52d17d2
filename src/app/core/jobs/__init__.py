"""Background job processing with ARQ.

The worker entry point is ``arq app.core.jobs.worker.WorkerSettings``.
It is not imported here so services can enqueue jobs without pulling
in every task module.
"""

from app.core.jobs.registry import enqueue, get_arq_pool, init_arq_pool


__all__ = [
    "enqueue",
    "get_arq_pool",
    "init_arq_pool",
]
