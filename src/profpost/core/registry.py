from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, Type, TypeVar

if TYPE_CHECKING:
    from .resolver import TargetResolver

T = TypeVar("T")


class RegistryBase(Generic[T]):
    """Class-level mapping of identifiers to registered entries.

    Each subclass keeps its own entries, in registration order.
    """

    @classmethod
    def _entries(cls) -> Dict[str, T]:
        if "_registry_entries" not in cls.__dict__:
            cls._registry_entries = {}  # type: ignore[attr-defined]
        return cls.__dict__["_registry_entries"]

    @classmethod
    def register(cls, key: str) -> Callable[[T], T]:
        def decorator(entry: T) -> T:
            entries = cls._entries()
            if key in entries:
                raise ValueError(f"'{key}' is already registered in {cls.__name__}")
            entries[key] = entry
            return entry

        return decorator

    @classmethod
    def get(cls, key: str) -> T:
        entries = cls._entries()
        if key not in entries:
            known = ", ".join(entries) or "none"
            raise KeyError(f"'{key}' is not registered in {cls.__name__} (known: {known})")
        return entries[key]

    @classmethod
    def create(cls, key: str, *args: Any, **kwargs: Any) -> Any:
        """Look up ``key`` and call the entry with the given arguments."""
        return cls.get(key)(*args, **kwargs)  # type: ignore[operator]

    @classmethod
    def keys(cls) -> tuple[str, ...]:
        return tuple(cls._entries())

    @classmethod
    def items(cls) -> tuple[tuple[str, T], ...]:
        return tuple(cls._entries().items())

    @classmethod
    def clear(cls) -> None:
        cls._entries().clear()


class ResolverRegistry(RegistryBase[Type["TargetResolver"]]):
    """Registry for target resolvers, keyed by resolver id."""


__all__ = ["RegistryBase", "ResolverRegistry"]
