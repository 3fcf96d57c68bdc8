"""Shared fixtures: a stand-in for the Anthropic client."""

import copy

import pytest


def text(value: str) -> dict:
    return {"type": "text", "text": value}


def tool_use(tool_id: str, name: str = "web_search") -> dict:
    return {"type": "tool_use", "id": tool_id, "name": name, "input": {"query": "competitors"}}


def message(*blocks: dict, stop_reason: str = "end_turn") -> dict:
    return {
        "id": "msg_test",
        "type": "message",
        "role": "assistant",
        "content": list(blocks),
        "stop_reason": stop_reason,
    }


class FakeMessages:
    def __init__(self, responses: list):
        self._responses = list(responses)
        self.calls: list[dict] = []

    def create(self, **params):
        self.calls.append(copy.deepcopy(params))
        if not self._responses:
            raise AssertionError("Unexpected extra messages.create call")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeClient:
    """Records every messages.create call and replays canned responses."""

    def __init__(self, *responses):
        self.messages = FakeMessages(list(responses))

    @property
    def calls(self) -> list[dict]:
        return self.messages.calls


@pytest.fixture
def make_client():
    return FakeClient
