"""Tests for request and transcript types."""

import pytest

from market_research.errors import ValidationError
from market_research.models import (
    ConversationTurn,
    Report,
    ResearchRequest,
    ToolInvocation,
    Transcript,
    tool_result_block,
)


class TestResearchRequest:
    def test_valid_request(self):
        ResearchRequest("Energy SaaS", "Who competes?").validate()

    def test_whitespace_only_query(self):
        with pytest.raises(ValidationError, match="research query"):
            ResearchRequest("Energy SaaS", "  \n").validate()

    def test_both_missing_message(self):
        with pytest.raises(ValidationError) as exc_info:
            ResearchRequest("", "").validate()
        assert str(exc_info.value) == "Please provide startup description and research query"


class TestTranscript:
    def test_messages_keep_order(self):
        transcript = Transcript()
        transcript.append("user", "hello")
        transcript.append("assistant", [{"type": "text", "text": "hi"}])

        assert transcript.to_messages() == [
            {"role": "user", "content": "hello"},
            {"role": "assistant", "content": [{"type": "text", "text": "hi"}]},
        ]

    def test_block_content_is_copied(self):
        blocks = [{"type": "text", "text": "hi"}]
        turn = ConversationTurn(role="assistant", content=blocks)
        message = turn.to_message()
        message["content"].append({"type": "text", "text": "extra"})
        assert len(blocks) == 1

    def test_tool_result_block(self):
        invocation = ToolInvocation.from_block({"type": "tool_use", "id": "toolu_1", "name": "web_search"})
        assert tool_result_block(invocation, "done") == {
            "type": "tool_result",
            "tool_use_id": "toolu_1",
            "content": "done",
        }


class TestReport:
    def test_sections_order(self):
        report = Report(raw_text="x", overview="o", pitch_outline="p")
        assert [title for title, _ in report.sections()] == [
            "Market Overview",
            "Competitor Analysis",
            "Customer Pain Points",
            "Strategic Recommendations",
            "Pitch Deck Outline",
        ]
        assert report.sections()[0][1] == "o"
        assert report.sections()[4][1] == "p"
        assert not report.is_empty
