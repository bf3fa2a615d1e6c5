from .fetchers import CandidateFetcher
from .priority_service import HubPriorityService, hub_priority_service

__all__ = ["CandidateFetcher", "HubPriorityService", "hub_priority_service"]
