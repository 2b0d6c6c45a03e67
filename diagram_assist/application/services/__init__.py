"""Service orchestrators."""

from .proposal_service import ApplyResult, ProposalService

__all__ = [
    "ApplyResult",
    "ProposalService",
]
