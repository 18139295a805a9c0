"""
ModelInfo DTO for provider model catalogs.

Represents a single catalog entry. Capabilities are stored as a frozenset of
:class:`Feature` so membership checks are O(1) and the entry can be shared
between callers without defensive deep copies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional

from .feature import APIEndpoint, Feature


@dataclass(frozen=True)
class ModelInfo:
    """A single model catalog entry.

    Attributes:
        id: Stable model identifier.
        display_name: Human-friendly display name.
        capabilities: Features the model supports. Any iterable of
            ``Feature`` members or their string values is accepted; unknown
            strings are dropped.
        api_endpoint: Optional endpoint; ``None`` means chat completions.

    Methods:
        has_capability: O(1) feature probe.
        to_dict: Return a JSON-serializable dictionary of the entry.
    """

    id: str
    display_name: str = ""
    capabilities: FrozenSet[Feature] = field(default_factory=frozenset)
    api_endpoint: Optional[APIEndpoint] = None

    def __post_init__(self) -> None:
        caps: Iterable[Any] = self.capabilities or ()
        parsed = frozenset(f for f in (Feature.parse(c) for c in caps) if f is not None)
        object.__setattr__(self, "capabilities", parsed)

    def has_capability(self, feature: Any) -> bool:
        """Report whether the model supports ``feature`` (unknown → False)."""
        parsed = Feature.parse(feature)
        return parsed is not None and parsed in self.capabilities

    def get_api_endpoint(self) -> APIEndpoint:
        """Return the endpoint, defaulting to chat completions."""
        return self.api_endpoint or APIEndpoint.COMPLETIONS

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "capabilities": sorted(f.value for f in self.capabilities),
            "api_endpoint": self.get_api_endpoint().value,
        }


__all__ = ["ModelInfo"]
