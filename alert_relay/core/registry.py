from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List

from alert_relay.core.errors import ProviderNotFoundError

ProviderFactory = Callable[..., Any]


class ProviderRegistry:
    """Provider factories keyed by module name and provider id."""

    def __init__(self) -> None:
        self._registry: Dict[str, Dict[str, ProviderFactory]] = defaultdict(dict)

    def register(self, module: str, provider_id: str, factory: ProviderFactory) -> None:
        self._registry[module][provider_id] = factory

    def has(self, module: str, provider_id: str) -> bool:
        return provider_id in self._registry.get(module, {})

    def resolve(self, module: str, provider_id: str, **kwargs: Any) -> Any:
        module_map = self._registry.get(module)
        if not module_map or provider_id not in module_map:
            raise ProviderNotFoundError(f"Provider not found: module={module}, provider_id={provider_id}")
        return module_map[provider_id](**kwargs)

    def resolve_chain(self, module: str, provider_ids: Iterable[str], **kwargs: Any) -> List[Any]:
        # Order is preserved; it is the failover order.
        return [self.resolve(module, provider_id, **kwargs) for provider_id in provider_ids]

    def list_ids(self, module: str) -> list[str]:
        return sorted(self._registry.get(module, {}).keys())
