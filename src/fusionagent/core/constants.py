"""Core constants for Fusion Agent.

Shared defaults for the fan-out/fetch/rank/fuse pipeline. The values here are
the defaults of FusionConfig; override them through config.yaml.
"""

# Channel selection
DEFAULT_DOMAIN = "general"
"""Domain used when a request names none, or names an unknown one."""

# Fetching
DEFAULT_FETCH_TIMEOUT_MS = 10_000
"""Hard wall-clock limit for a single channel fetch, in milliseconds."""

# Scoring
SNIPPET_MAX_CHARS = 3000
"""Normalized text is truncated to this length before any scoring."""

DEFAULT_AUTHORITY = 0.5
"""Trust weight for channels without an explicit authority entry."""

# Synthesis
TOP_N = 5
"""Number of ranked results that feed the summary and findings."""

SUMMARY_CHARS_PER_SOURCE = 300
"""Characters taken from each top snippet for the executive summary."""

SUMMARY_SEPARATOR = " ... "

SEGMENTS_PER_SNIPPET = 2
"""Sentence segments taken from each top snippet for key findings."""

MAX_FINDINGS = 6

NO_EVIDENCE_SUMMARY = "No strong evidence found."

FOLLOW_UP_PROBE = "Would you like a deeper dive on any result?"

QUERY_REQUIRED_MESSAGE = "query required"
