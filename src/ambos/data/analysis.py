"""Pydantic models for AI-produced analysis, entity graphs and locations.

AI output is validated here rather than trusted: a response that lacks any of
the required top-level fields fails validation instead of being coerced into
a partial result.
"""

import re
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field, field_validator, model_validator


def normalize_text_list(value: Any) -> list[str]:
    """Normalize a "string or list" AI field into a list of strings.

    Models return fields such as ``weak_signals`` either as a prose string or
    as a list whose items are strings or ``{"signal": ...}`` objects. A string
    is split on ``.`` and ``;``.

    Raises:
        ValueError: If the value has any other shape.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in re.split(r"[.;]", value) if part.strip()]
    if isinstance(value, list):
        items: list[str] = []
        for item in value:
            if isinstance(item, dict):
                text = str(item.get("signal") or item.get("text") or "")
            else:
                text = str(item)
            if text.strip():
                items.append(text.strip())
        return items
    raise ValueError(f"Expected a string or a list, got {type(value).__name__}")


# Public name for the weak-signal adapter; same normalization.
normalize_weak_signals = normalize_text_list

TextList = Annotated[list[str], BeforeValidator(normalize_text_list)]


class _Frozen(BaseModel):
    model_config = {"frozen": True, "extra": "ignore"}


class Entity(_Frozen):
    """An entity named in the analysed articles."""

    name: str
    type: str = "other"
    relevance: str = ""


class Prediction(_Frozen):
    """A forward-looking statement with its estimated probability."""

    prediction: str
    probability: float = 0.0
    timeframe: str = ""
    confidence_factors: TextList = Field(default_factory=list)
    risk_level: str = "medium"
    weak_signals: TextList = Field(default_factory=list)

    @field_validator("probability", mode="before")
    @classmethod
    def parse_probability(cls, v: Any) -> float:
        if v is None:
            return 0.0
        if isinstance(v, str):
            match = re.search(r"-?\d+(?:\.\d+)?", v)
            v = float(match.group()) if match else 0.0
        if not isinstance(v, int | float):
            raise ValueError(f"probability must be a number or text, got {type(v).__name__}")
        return max(0.0, min(100.0, float(v)))


class CommunitySentiment(_Frozen):
    """Discourse-level sentiment of social-media communities."""

    community_mood: str = ""
    divergences: TextList = Field(default_factory=list)
    convergences: TextList = Field(default_factory=list)
    weak_signals: TextList = Field(default_factory=list)
    volatility: str = ""

    @model_validator(mode="before")
    @classmethod
    def from_label(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"community_mood": data}
        return data


class PressSentiment(_Frozen):
    """Sentiment of press coverage, split between public and expert voices."""

    overall: str = "neutral"
    public: str = ""
    experts: str = ""
    weak_signals: TextList = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def from_label(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"overall": data}
        return data


class CommunityAnalysis(_Frozen):
    """Analysis of OSINT (social-media) sources."""

    kind: Literal["osint"] = "osint"
    summary: str
    entities: list[Entity]
    predictions: list[Prediction]
    sentiment: CommunitySentiment
    key_points: TextList = Field(default_factory=list)


class PressAnalysis(_Frozen):
    """Analysis of press (news API and RSS) sources."""

    kind: Literal["news"] = "news"
    summary: str
    entities: list[Entity]
    predictions: list[Prediction]
    sentiment: PressSentiment
    key_points: TextList = Field(default_factory=list)


AnalysisResult = Annotated[CommunityAnalysis | PressAnalysis, Field(discriminator="kind")]


class GraphNode(_Frozen):
    """An entity node of the relationship graph."""

    id: str
    name: str
    type: str = "other"
    description: str = ""
    importance: float = 0.0
    influence: float = 0.0
    image: str | None = None


class GraphLink(_Frozen):
    """A relationship between two graph nodes."""

    source: str
    target: str
    type: str = "related_to"
    strength: float = 0.0
    bidirectional: bool = False


class EntityGraph(_Frozen):
    """Entities and relationships extracted from a set of articles."""

    nodes: list[GraphNode] = Field(default_factory=list)
    links: list[GraphLink] = Field(default_factory=list)


class SourceLocation(_Frozen):
    """Geographic origin of a publisher or author."""

    name: str
    lat: float
    lng: float
    relevance: str = ""
