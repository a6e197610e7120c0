"""
Fusion Agent: concurrent web channel probing with ranked answer fusion

Answers a natural-language query by probing a domain's public web channels in
parallel, normalizing each response to text, ranking results by match and
source authority, and fusing the top results into a cited answer.
"""

from fusionagent.channels import AuthorityTable, ChannelRegistry
from fusionagent.core import AnswerPayload, ValidationError
from fusionagent.engine import FusionEngine, answer_query
from fusionagent.fetching import BoundedFetcher
from fusionagent.utils import TextNormalizer, normalize

__version__ = "0.1.0"

__all__ = [
    # Engine
    "FusionEngine",
    "answer_query",
    # Components
    "AuthorityTable",
    "BoundedFetcher",
    "ChannelRegistry",
    "TextNormalizer",
    "normalize",
    # Types
    "AnswerPayload",
    "ValidationError",
]
