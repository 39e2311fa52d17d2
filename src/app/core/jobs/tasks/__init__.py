"""Background job tasks registered in the worker."""

from app.core.jobs.tasks.cleanup import cleanup_expired_tokens
from app.core.jobs.tasks.notifications import deliver_notification
from app.core.jobs.tasks.sync import sync_all_tenants, sync_tenant_documents


__all__ = [
    "cleanup_expired_tokens",
    "deliver_notification",
    "sync_all_tenants",
    "sync_tenant_documents",
]
