"""
Hub priorities API response models.
Domain dataclasses are converted here so the wire shape stays stable.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from app.features.hub_priorities.domain.models import (
    DayContext,
    ItemKind,
    PriorityResult,
    ScoredItem,
    SuggestedAction,
    TimeContext,
)


class ScoreFactorsResponse(BaseModel):
    base: float = Field(..., description="Kind base weight after category/type adjustments")
    deadline: float = Field(..., description="Deadline proximity multiplier")
    client: float = Field(..., description="Client importance multiplier")
    staleness: float = Field(..., description="Age-based resurfacing multiplier")
    momentum: float = Field(..., description="Thread momentum multiplier")


class HubPriorityItemResponse(BaseModel):
    id: str = Field(..., description="Composite id: <kind>-<original id>")
    type: ItemKind = Field(..., description="Source kind of the item")
    title: str
    description: str = ""
    ai_summary: str | None = Field(None, description="Summary from the upstream classifier")
    why_important: str = Field(..., description="Human-readable ranking rationale")
    suggested_action: SuggestedAction | None = None
    priority_score: int = Field(..., ge=0, le=100)
    score_factors: ScoreFactorsResponse
    deadline: str | None = None
    time_remaining: str | None = None
    client_name: str | None = None
    sender_name: str | None = None
    sender_email: str | None = None
    original_id: str
    href: str = Field(..., description="Navigation reference for the client")
    date: str

    @classmethod
    def from_domain(cls, item: ScoredItem) -> "HubPriorityItemResponse":
        return cls(
            id=item.id,
            type=item.kind,
            title=item.title,
            description=item.description,
            ai_summary=item.ai_summary,
            why_important=item.rationale,
            suggested_action=item.suggested_action,
            priority_score=item.score,
            score_factors=ScoreFactorsResponse(
                base=item.factors.base,
                deadline=item.factors.deadline,
                client=item.factors.client,
                staleness=item.factors.staleness,
                momentum=item.factors.momentum,
            ),
            deadline=item.deadline,
            time_remaining=item.time_remaining,
            client_name=item.client_name,
            sender_name=item.sender_name,
            sender_email=item.sender_email,
            original_id=item.original_id,
            href=item.href,
            date=item.date,
        )


class HubPriorityStatsResponse(BaseModel):
    total_candidates: int
    messages_considered: int
    tasks_considered: int
    events_considered: int
    extracted_dates_considered: int
    processing_time_ms: float


class HubPrioritiesResponse(BaseModel):
    items: list[HubPriorityItemResponse]
    stats: HubPriorityStatsResponse
    last_updated: datetime
    time_context: TimeContext | None = None
    day_context: DayContext | None = None

    @classmethod
    def from_domain(cls, result: PriorityResult) -> "HubPrioritiesResponse":
        stats = result.stats
        return cls(
            items=[HubPriorityItemResponse.from_domain(item) for item in result.items],
            stats=HubPriorityStatsResponse(
                total_candidates=stats.total_candidates,
                messages_considered=stats.messages_considered,
                tasks_considered=stats.tasks_considered,
                events_considered=stats.events_considered,
                extracted_dates_considered=stats.extracted_dates_considered,
                processing_time_ms=stats.processing_time_ms,
            ),
            last_updated=result.last_updated,
            time_context=result.time_context,
            day_context=result.day_context,
        )
