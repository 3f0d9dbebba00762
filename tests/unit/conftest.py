"""Shared fixtures for unit tests."""

import asyncio
from dataclasses import replace
from typing import Any, Optional
from unittest.mock import AsyncMock

import pytest

from domain.entities.profile import Profile


class FakeUnitOfWork:
    """Fake Unit of Work with a mocked profile repository for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, exc_type: Any, *args: Any) -> None:
        if exc_type:
            await self.rollback()


class InMemoryProfileRepository:
    """Dict-backed profile store that hands out copies, like a real session would.

    When ``read_barrier`` is set, every read waits on it after fetching, so
    tests can force concurrent read-modify-write interleavings.
    """

    def __init__(self, read_barrier: Optional[asyncio.Barrier] = None) -> None:
        self.rows: dict[str, Profile] = {}
        self.save_count = 0
        self._read_barrier = read_barrier

    async def get_by_username(self, username: str) -> Profile | None:
        row = self.rows.get(username)
        snapshot = replace(row) if row else None
        if self._read_barrier is not None:
            await self._read_barrier.wait()
        return snapshot

    async def save(self, profile: Profile) -> Profile:
        self.save_count += 1
        self.rows[profile.username] = replace(profile)
        return replace(profile)


class InMemoryUnitOfWork:
    """Unit of Work over a shared InMemoryProfileRepository."""

    def __init__(self, repository: InMemoryProfileRepository) -> None:
        self.profiles = repository

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass

    async def __aenter__(self) -> "InMemoryUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


def make_profile(**overrides: Any) -> Profile:
    """Build a Profile with sensible defaults."""
    values: dict[str, Any] = {
        "username": "jdoe",
        "email": "a@x.com",
        "first_name": "Jo",
        "last_name": "Doe",
    }
    values.update(overrides)
    return Profile(**values)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def profile() -> Profile:
    return make_profile()
