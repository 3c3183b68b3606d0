"""Base repository with shared Supabase client."""

from supabase._async.client import AsyncClient


class BaseRepository:
    """Base class for all repositories.

    Repositories return plain rows or models and let PostgREST errors
    propagate; services decide how a failure is reported.
    """

    def __init__(self, client: AsyncClient) -> None:
        self.client = client
