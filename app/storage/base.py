"""Abstract upstream storage backend."""

from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Interface for a remote file host that hands back a public URL."""

    @abstractmethod
    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str | None = None,
    ) -> str | None:
        """
        Send the file and return its public URL.
        Returns None when the host answered but gave no usable URL.
        Transport failures and non-2xx statuses raise httpx.HTTPError.
        """
        ...
