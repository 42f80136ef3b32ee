"""Resume Backend Transport - Module Exports"""

from .client import BackendClient, BackendClientError, create_backend_client
from .schemas import CompletionNotice, JobMeta, JobSubmission, ResendRequest

__all__ = [
    # Schemas
    "JobSubmission",
    "JobMeta",
    "CompletionNotice",
    "ResendRequest",
    # Client
    "BackendClient",
    "BackendClientError",
    "create_backend_client",
]
