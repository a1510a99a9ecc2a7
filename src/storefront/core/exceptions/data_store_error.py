from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DataStoreError(Exception):
    table: str
    message: str
    retryable: bool = False
    status_code: int | None = None
    error_code: str | None = None

    def __str__(self) -> str:
        code = f" status={self.status_code}" if self.status_code is not None else ""
        return f"{self.table}: {self.message}{code}"


@dataclass
class UniqueViolationError(DataStoreError):
    """An insert collided with a uniqueness constraint."""


@dataclass
class StorageUnavailableError(DataStoreError):
    """Transport-level or 5xx failure; the write may or may not have been applied."""

    retryable: bool = True
