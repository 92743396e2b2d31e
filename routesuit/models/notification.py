"""Notification run models."""

from dataclasses import dataclass
from enum import StrEnum

from routesuit.models.recommendation import CommuteRecommendations


class NotifyStatus(StrEnum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class NotifyResult:
    status: NotifyStatus
    local_date: str
    title: str = ""
    body: str = ""
    reason: str = ""
    recommendations: CommuteRecommendations | None = None
