"""
Hub priorities feature package.

Keeps every layer of the cross-source priority ranking (domain models,
scoring, repository, services and the API router) in one vertical slice.
"""

from .api.router import router as hub_router  # noqa: F401
from .services.priority_service import HubPriorityService, hub_priority_service  # noqa: F401
