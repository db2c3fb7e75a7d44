from typing import Protocol, runtime_checkable


@runtime_checkable
class RateStore(Protocol):
    """Persistent key-value store for daily rates, keyed by (pair, timestamp)."""

    def get(self, pair: str, timestamp: str) -> str | None:
        """Point lookup; None on cache miss."""
        ...

    def get_many(self, pair: str, timestamps: list[str]) -> dict[str, str]:
        """Batched lookup; missing keys are simply absent from the result."""
        ...

    def set(self, pair: str, timestamp: str, rate: str) -> None:
        """Single-key upsert."""
        ...


@runtime_checkable
class RateSource(Protocol):
    """Remote rate lookup (Coincheck, or a stub in tests)."""

    def fetch_rate(self, pair: str, timestamp: str) -> str | None:
        """Rate at the given instant, or None when the API answers without one."""
        ...
