from .jobs import JobRepository
from .session import DbSession

__all__ = [
    "DbSession",
    "JobRepository",
]
