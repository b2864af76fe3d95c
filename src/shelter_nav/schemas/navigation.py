"""Pydantic v2 schemas for the navigation view model handed to the renderer."""

from enum import StrEnum

from pydantic import BaseModel, Field


class SessionState(StrEnum):
    """Lifecycle state of a navigation session."""

    IDLE = "idle"
    LOCATING_USER = "locating_user"
    RESOLVING_REGION = "resolving_region"
    LOADING_SHELTERS = "loading_shelters"
    AWAITING_ORIENTATION = "awaiting_orientation"
    TRACKING = "tracking"
    FAILED = "failed"


class ArrowView(BaseModel):
    """One arrow pointing toward a ranked shelter."""

    rank: int = Field(..., ge=1)
    rotation_degrees: float
    distance_label: str


class NeedleView(BaseModel):
    """The north-pointing compass needle."""

    rotation_degrees: float = 0.0


class ShelterCard(BaseModel):
    """Summary card for one ranked shelter."""

    rank: int = Field(..., ge=1)
    rank_label: str
    name: str
    distance_label: str
    direction_label: str
    address: str


class NavigationViewModel(BaseModel):
    """Everything an external presentation layer needs to draw one frame."""

    state: SessionState
    status: str
    error: str | None = None
    arrows: list[ArrowView] = Field(default_factory=list)
    needle: NeedleView = Field(default_factory=NeedleView)
    shelters: list[ShelterCard] = Field(default_factory=list)
