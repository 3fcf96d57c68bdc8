"""Request, transcript and report types shared by the orchestrator and extractor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from .errors import ValidationError

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class ResearchRequest:
    """What the caller wants researched."""

    subject_description: str
    query: str

    def validate(self) -> None:
        """Raise ValidationError unless both fields carry text."""
        missing = []
        if not self.subject_description or not self.subject_description.strip():
            missing.append("startup description")
        if not self.query or not self.query.strip():
            missing.append("research query")
        if missing:
            raise ValidationError(missing)


@dataclass(frozen=True)
class ToolInvocation:
    """A tool_use block emitted by the assistant."""

    id: str
    name: str

    @classmethod
    def from_block(cls, block: dict[str, Any]) -> "ToolInvocation":
        return cls(id=str(block.get("id", "")), name=str(block.get("name", "")))


def tool_result_block(invocation: ToolInvocation, content: str) -> dict[str, Any]:
    return {
        "type": "tool_result",
        "tool_use_id": invocation.id,
        "content": content,
    }


@dataclass
class ConversationTurn:
    """One message of the transcript sent to the service.

    ``content`` is either plain text or a list of typed blocks, the same
    shapes the Messages API accepts.
    """

    role: Role
    content: str | list[dict[str, Any]]

    def to_message(self) -> dict[str, Any]:
        content = self.content if isinstance(self.content, str) else list(self.content)
        return {"role": self.role, "content": content}


@dataclass
class Transcript:
    """Append-only list of turns for a single session."""

    turns: list[ConversationTurn] = field(default_factory=list)

    def append(self, role: Role, content: str | list[dict[str, Any]]) -> ConversationTurn:
        turn = ConversationTurn(role=role, content=content)
        self.turns.append(turn)
        return turn

    def to_messages(self) -> list[dict[str, Any]]:
        return [turn.to_message() for turn in self.turns]


@dataclass(frozen=True)
class Report:
    """Structured market research report.

    Sections that were not found in the answer are empty strings.
    ``raw_text`` is always the full answer the sections were cut from.
    """

    raw_text: str
    overview: str = ""
    competitors: str = ""
    pain_points: str = ""
    recommendations: str = ""
    pitch_outline: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.raw_text.strip()

    def sections(self) -> list[tuple[str, str]]:
        """Return (title, content) pairs in display order, including empty ones."""
        return [
            ("Market Overview", self.overview),
            ("Competitor Analysis", self.competitors),
            ("Customer Pain Points", self.pain_points),
            ("Strategic Recommendations", self.recommendations),
            ("Pitch Deck Outline", self.pitch_outline),
        ]
