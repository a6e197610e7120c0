"""Static source-authority prior per channel id."""

from types import MappingProxyType
from typing import Dict, Mapping, Optional

from fusionagent.core.constants import DEFAULT_AUTHORITY

# Specialist/academic 0.95, encyclopedic 0.9, finance specialist 0.8.
# General search engines fall through to DEFAULT_AUTHORITY.
DEFAULT_AUTHORITY_WEIGHTS: Dict[str, float] = {
    "arxiv": 0.95,
    "pubmed": 0.95,
    "semantic": 0.9,
    "wikipedia": 0.9,
    "yahoo_finance": 0.8,
}


class AuthorityTable:
    """Immutable lookup from channel id to trust weight in [0, 1]."""

    def __init__(
        self,
        weights: Optional[Mapping[str, float]] = None,
        default: float = DEFAULT_AUTHORITY,
    ):
        """Initialize authority table.

        Args:
            weights: Channel id -> weight (defaults to DEFAULT_AUTHORITY_WEIGHTS)
            default: Weight for ids not present in weights

        Raises:
            ValueError: If any weight lies outside [0, 1]
        """
        merged = dict(DEFAULT_AUTHORITY_WEIGHTS if weights is None else weights)
        for channel_id, weight in list(merged.items()) + [("<default>", default)]:
            if not 0.0 <= float(weight) <= 1.0:
                raise ValueError(
                    f"Authority for '{channel_id}' must be in [0, 1], got {weight}"
                )

        self._weights: Mapping[str, float] = MappingProxyType(
            {k: float(v) for k, v in merged.items()}
        )
        self.default = float(default)

    @classmethod
    def with_overrides(cls, overrides: Mapping[str, float]) -> "AuthorityTable":
        """Create a table of the built-in weights updated with overrides."""
        weights = dict(DEFAULT_AUTHORITY_WEIGHTS)
        weights.update(overrides)
        return cls(weights)

    def authority_of(self, channel_id: str) -> float:
        """Get the trust weight for a channel id."""
        return self._weights.get(channel_id, self.default)

    def as_dict(self) -> Dict[str, float]:
        """Get a copy of the explicit weights (ids on the default are absent)."""
        return dict(self._weights)
