"""Configuration schema and default values for Fusion Agent."""

from dataclasses import asdict, dataclass, field, fields
from typing import Dict

from fusionagent.core.constants import (
    DEFAULT_FETCH_TIMEOUT_MS,
    MAX_FINDINGS,
    SEGMENTS_PER_SNIPPET,
    SNIPPET_MAX_CHARS,
    SUMMARY_CHARS_PER_SOURCE,
    TOP_N,
)
from fusionagent.core.errors import ConfigError


@dataclass
class FusionConfig:
    """Fan-out, scoring and synthesis tunables."""

    # Per-channel wall-clock limit
    fetch_timeout_ms: int = DEFAULT_FETCH_TIMEOUT_MS

    # Normalized text is cut to this length before scoring
    snippet_max_chars: int = SNIPPET_MAX_CHARS

    # Ranked results used for summary, findings and confidence
    top_n: int = TOP_N

    summary_chars: int = SUMMARY_CHARS_PER_SOURCE
    segments_per_snippet: int = SEGMENTS_PER_SNIPPET
    max_findings: int = MAX_FINDINGS

    # Channel id -> weight, merged over the built-in authority table
    authority_overrides: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        """Validate configuration values."""
        for name in (
            "fetch_timeout_ms",
            "snippet_max_chars",
            "top_n",
            "summary_chars",
            "segments_per_snippet",
            "max_findings",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigError(
                    f"{name} must be a positive integer, got {value!r}", key=name
                )

        for channel_id, weight in self.authority_overrides.items():
            if not isinstance(weight, (int, float)) or not 0.0 <= weight <= 1.0:
                raise ConfigError(
                    f"authority_overrides[{channel_id!r}] must be in [0, 1], "
                    f"got {weight!r}",
                    key="authority_overrides",
                )


@dataclass
class ServerConfig:
    """API server binding."""

    host: str = "0.0.0.0"
    port: int = 8000

    def __post_init__(self):
        if not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise ConfigError(
                f"port must be in 1-65535, got {self.port!r}", key="port"
            )


@dataclass
class FusionAgentConfig:
    """Main configuration for Fusion Agent."""

    fusion: FusionConfig
    server: ServerConfig

    def to_dict(self) -> dict:
        """Convert config to dictionary for YAML serialization."""
        return {
            "fusion": asdict(self.fusion),
            "server": asdict(self.server),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FusionAgentConfig":
        """Create config from dictionary (loaded from YAML)."""
        fusion_data = data.get("fusion") or {}
        server_data = data.get("server") or {}

        def _filter(cls_, data_):
            """Filter dict to only include known dataclass fields."""
            known = {f.name for f in fields(cls_)}
            return {k: v for k, v in data_.items() if k in known}

        return cls(
            fusion=FusionConfig(**_filter(FusionConfig, fusion_data)),
            server=ServerConfig(**_filter(ServerConfig, server_data)),
        )

    @classmethod
    def create_default(cls) -> "FusionAgentConfig":
        """Create default configuration."""
        return cls(fusion=FusionConfig(), server=ServerConfig())
