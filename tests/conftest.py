"""
Cachify — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
import re
from collections.abc import AsyncGenerator, AsyncIterator, Generator
from typing import Any

import pytest
import pytest_asyncio
from redis.asyncio import Redis

from cachify.config import reset_config


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate the subset of redis glob syntax the backend emits."""
    out = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\" and i + 1 < len(pattern):
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if ch == "*":
            out.append(".*")
        elif ch == "?":
            out.append(".")
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("".join(out) + r"\Z", re.DOTALL)


class FakeRedis:
    """
    In-memory stand-in for the redis.asyncio client surface used by CachifyRedis.

    Records the EX value passed to set() so tests can assert TTL conversion.
    Expiry itself is not simulated.
    """

    def __init__(self, decode_responses: bool = True) -> None:
        self.decode_responses = decode_responses
        self.data: dict[str, str] = {}
        self.expiry: dict[str, int | None] = {}
        self.scan_patterns: list[str] = []
        self.closed = False

    def _out(self, value: str | None) -> str | bytes | None:
        if value is None or self.decode_responses:
            return value
        return value.encode("utf-8")

    async def set(self, name: str, value: str, ex: int | None = None) -> bool:
        self.data[name] = value
        self.expiry[name] = ex
        return True

    async def get(self, name: str) -> str | bytes | None:
        return self._out(self.data.get(name))

    async def delete(self, *names: str) -> int:
        count = 0
        for name in names:
            if isinstance(name, bytes):
                name = name.decode("utf-8")
            if self.data.pop(name, None) is not None:
                self.expiry.pop(name, None)
                count += 1
        return count

    async def scan_iter(self, match: str | None = None, count: int | None = None) -> AsyncIterator[Any]:
        self.scan_patterns.append(match or "*")
        regex = _glob_to_regex(match or "*")
        for key in list(self.data):
            if regex.match(key):
                yield self._out(key)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Fresh fake redis client (str responses)."""
    return FakeRedis()


@pytest.fixture
def fake_redis_bytes() -> FakeRedis:
    """Fresh fake redis client returning bytes, like decode_responses=False."""
    return FakeRedis(decode_responses=False)


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def clock() -> FakeClock:
    """Fake clock for deterministic expiry tests."""
    return FakeClock()


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest_asyncio.fixture
async def redis_client(test_redis_url: str) -> AsyncGenerator[Redis, None]:
    """
    Create a live Redis client for testing.

    Automatically skips tests if Redis is not available.
    Clears the test database before and after each test.
    """
    client: Redis = Redis.from_url(test_redis_url, decode_responses=False)

    try:
        await client.ping()
    except Exception as e:
        await client.aclose()
        pytest.skip(f"Redis not available for testing: {e}")

    await client.flushdb()

    yield client

    try:
        await client.flushdb()
    finally:
        await client.aclose()


@pytest.fixture
def mock_env_development(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Environment selecting the local backend, with no .env file in the CWD."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CACHIFY_MODE", "development")
    monkeypatch.delenv("CACHIFY_DEBUG", raising=False)
    monkeypatch.delenv("CACHIFY_LOCAL_MAX_SIZE", raising=False)


@pytest.fixture
def mock_env_production(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Environment selecting the redis backend, with no .env file in the CWD."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CACHIFY_MODE", "production")
    monkeypatch.delenv("CACHIFY_DEBUG", raising=False)
    monkeypatch.delenv("CACHIFY_LOCAL_MAX_SIZE", raising=False)


@pytest.fixture
def sample_cache_data() -> dict[str, Any]:
    """Sample JSON-compatible data for cache testing."""
    return {
        "simple_string": "hello",
        "simple_int": 42,
        "simple_float": 3.14,
        "simple_bool": True,
        "complex_dict": {
            "nested": {
                "key": "value",
                "number": 123,
                "list": [1, 2, 3],
            }
        },
        "complex_list": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ],
    }


@pytest.fixture(autouse=True)
def reset_cachify_config() -> Generator[None, None, None]:
    """Reset memoized configuration after each test to prevent state leakage."""
    yield
    reset_config()
