"""
Values the wizard collects and passes between stages.

    CampaignInput   what the user told us about the business (frozen)
    Concept         one of the fixed-size set of lead magnet ideas (frozen)
    Outline         approved title/introduction/core points (frozen)
    OutlineDraft    the editable copy shown during outline review
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from config.constants import MIN_CORE_POINTS

from ..errors import ValidationError


class Tone(Enum):
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    CASUAL = "casual"
    AUTHORITATIVE = "authoritative"
    MOTIVATIONAL = "motivational"


# ============================================================================
# Campaign input
# ============================================================================

@dataclass(frozen=True)
class CampaignInput:
    """
    Business and audience description submitted on the first wizard step.

    Every text field is required; tone defaults to professional.
    """
    operator_name: str
    brand_name: str
    audience_description: str
    niche_label: str
    problem_statement: str
    desired_outcome: str
    operator_title: str
    tone: Tone = Tone.PROFESSIONAL

    def validate(self) -> List[str]:
        """camelCase names of blank required fields, in declaration order."""
        return [
            key for key, value in self.to_dict().items()
            if key != "tone" and not str(value or "").strip()
        ]

    def validate_or_raise(self) -> None:
        missing = self.validate()
        if missing:
            raise ValidationError(
                missing[0],
                "is required",
                errors=[f"{name}: is required" for name in missing],
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operatorName": self.operator_name,
            "brandName": self.brand_name,
            "audienceDescription": self.audience_description,
            "nicheLabel": self.niche_label,
            "problemStatement": self.problem_statement,
            "desiredOutcome": self.desired_outcome,
            "operatorTitle": self.operator_title,
            "tone": self.tone.value,
        }


# ============================================================================
# Concepts and outlines
# ============================================================================

@dataclass(frozen=True)
class Concept:
    id: str
    title: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "title": self.title, "description": self.description}


def new_concept_ids(count: int) -> List[str]:
    """Ids for one batch of concepts: concept-<batch>-1 .. concept-<batch>-N."""
    batch = uuid.uuid4().hex[:8]
    return [f"concept-{batch}-{i}" for i in range(1, count + 1)]


@dataclass(frozen=True)
class Outline:
    title: str
    introduction: str
    core_points: Tuple[str, ...] = ()

    def __post_init__(self):
        if isinstance(self.core_points, list):
            object.__setattr__(self, "core_points", tuple(self.core_points))

    def validate(self) -> List[Tuple[str, str]]:
        problems = []
        if not self.title.strip():
            problems.append(("title", "is required"))
        if not self.introduction.strip():
            problems.append(("introduction", "is required"))
        if sum(1 for p in self.core_points if p.strip()) < MIN_CORE_POINTS:
            problems.append(("corePoints", f"at least {MIN_CORE_POINTS} core point(s) required"))
        return problems

    def validate_or_raise(self) -> None:
        problems = self.validate()
        if problems:
            field_name, message = problems[0]
            raise ValidationError(field_name, message, errors=[f"{f}: {m}" for f, m in problems])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "introduction": self.introduction,
            "corePoints": list(self.core_points),
        }


@dataclass
class OutlineDraft:
    """
    Editable outline bound to the review stage that issued it.

    `review_token` identifies that stage; a draft from an earlier review
    (before a go-back) is rejected on approval.
    """
    title: str
    introduction: str
    core_points: List[str] = field(default_factory=list)
    review_token: str = field(default_factory=lambda: uuid.uuid4().hex)

    @classmethod
    def from_outline(cls, outline: Outline, review_token: Optional[str] = None) -> 'OutlineDraft':
        draft = cls(outline.title, outline.introduction, list(outline.core_points))
        if review_token is not None:
            draft.review_token = review_token
        return draft

    def set_title(self, title: str) -> None:
        self.title = title

    def set_introduction(self, introduction: str) -> None:
        self.introduction = introduction

    def update_point(self, index: int, text: str) -> None:
        self.core_points[index] = text

    def add_point(self, text: str = "") -> None:
        self.core_points.append(text)

    def remove_point(self, index: int) -> None:
        del self.core_points[index]

    def move_point(self, index: int, new_index: int) -> None:
        point = self.core_points.pop(index)
        self.core_points.insert(new_index, point)

    def freeze(self) -> Outline:
        """Copy by value; later edits to the draft do not reach the Outline."""
        return Outline(
            title=self.title.strip(),
            introduction=self.introduction.strip(),
            core_points=tuple(p.strip() for p in self.core_points if p.strip()),
        )
