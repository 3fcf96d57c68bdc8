"""Research session orchestration against the Anthropic Messages API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import anthropic

from .errors import MalformedResponseError, ServiceError
from .models import ResearchRequest, ToolInvocation, Transcript, tool_result_block
from .prompts import build_user_prompt, get_system_prompt, get_tool_result_ack

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 4000
DEFAULT_TEMPERATURE = 0.7

WEB_SEARCH_TOOL: dict[str, str] = {
    "type": "web_search_20250305",
    "name": "web_search",
}

TOOL_USE_STOP_REASON = "tool_use"


def build_client(**kwargs: Any) -> anthropic.Anthropic:
    """Create an Anthropic client with SDK retries disabled.

    A session makes at most two requests; retrying is left to the caller.
    """
    kwargs.setdefault("max_retries", 0)
    return anthropic.Anthropic(**kwargs)


@dataclass
class ParsedResponse:
    """Text and pending tool invocations pulled out of one response."""

    stop_reason: str | None
    content: list[dict[str, Any]] = field(default_factory=list)
    texts: list[str] = field(default_factory=list)
    invocations: list[ToolInvocation] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.texts)

    @property
    def wants_tool_result(self) -> bool:
        return self.stop_reason == TOOL_USE_STOP_REASON and bool(self.invocations)


def _response_to_dict(response: Any) -> dict[str, Any]:
    if isinstance(response, dict):
        return response
    if hasattr(response, "model_dump"):
        return response.model_dump(exclude_none=True)
    raise MalformedResponseError(f"Unexpected response type: {type(response).__name__}")


def parse_response(response: Any) -> ParsedResponse:
    """Split a Messages API response into text and tool_use blocks.

    Raises:
        MalformedResponseError: If the body has no list of content blocks.
    """
    body = _response_to_dict(response)
    content = body.get("content")
    if not isinstance(content, list):
        raise MalformedResponseError("Response body has no content block list")

    parsed = ParsedResponse(stop_reason=body.get("stop_reason"), content=content)
    for block in content:
        if not isinstance(block, dict):
            continue
        kind = block.get("type")
        if kind == "text":
            parsed.texts.append(block.get("text") or "")
        elif kind == "tool_use":
            parsed.invocations.append(ToolInvocation.from_block(block))
    return parsed


class SessionOrchestrator:
    """Drives one research exchange with the generative service.

    A session is the initial request plus at most one continuation that
    reports the web search as completed. The search itself runs on the
    service side; nothing here executes tools.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        client: Any | None = None,
        on_progress: ProgressCallback | None = None,
        llm_log_dir: Path | None = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client = client
        self._on_progress = on_progress
        self._llm_log_dir = Path(llm_log_dir) if llm_log_dir else None

    def _emit(self, message: str) -> None:
        """Emit a progress message if callback is set."""
        if self._on_progress:
            self._on_progress(message)

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = build_client()
        return self._client

    def run(self, request: ResearchRequest) -> str:
        """Run a research session and return the final answer text.

        Raises:
            ValidationError: If the description or query is empty.
            ServiceError: If either service call fails.
        """
        request.validate()

        system_prompt = get_system_prompt()
        transcript = Transcript()
        transcript.append("user", build_user_prompt(request.subject_description, request.query))

        self._emit(f"Calling {self.model} with web search enabled...")
        first = self._send(
            phase="initial",
            params={
                "model": self.model,
                "max_tokens": self.max_tokens,
                "extra_body": {"temperature": self.temperature},
                "system": system_prompt,
                "messages": transcript.to_messages(),
                "tools": [dict(WEB_SEARCH_TOOL)],
            },
        )

        if not first.wants_tool_result:
            self._emit("Research response received")
            return first.text

        names = ", ".join(sorted({inv.name for inv in first.invocations}))
        self._emit(f"Service requested {len(first.invocations)} tool call(s): {names}")

        ack = get_tool_result_ack()
        transcript.append("assistant", first.content)
        transcript.append("user", [tool_result_block(inv, ack) for inv in first.invocations])

        self._emit("Sending tool results and waiting for the final report...")
        final = self._send(
            phase="continuation",
            params={
                "model": self.model,
                "max_tokens": self.max_tokens,
                "system": system_prompt,
                "messages": transcript.to_messages(),
            },
        )
        if final.wants_tool_result:
            logger.warning(
                "Service requested another tool call after continuation; "
                "returning the text received so far"
            )

        self._emit("Research response received")
        return final.text

    def _send(self, phase: str, params: dict[str, Any]) -> ParsedResponse:
        """Issue one messages.create call and parse the result."""
        try:
            response = self.client.messages.create(**params)
        except anthropic.APIStatusError as e:
            self._log_llm_call(phase, params, f"[ERROR: status {e.status_code}] {e}")
            raise ServiceError(f"API request failed: {e.status_code}", status_code=e.status_code) from e
        except anthropic.APIConnectionError as e:
            self._log_llm_call(phase, params, f"[ERROR: connection] {e}")
            raise ServiceError(f"API request failed: {e}") from e
        except anthropic.APIError as e:
            self._log_llm_call(phase, params, f"[ERROR: {type(e).__name__}] {e}")
            raise ServiceError(f"API request failed: {e}") from e

        try:
            parsed = parse_response(response)
        except MalformedResponseError as e:
            logger.warning("Malformed %s response, treating as empty: %s", phase, e)
            parsed = ParsedResponse(stop_reason=None)

        self._log_llm_call(phase, params, parsed.text, stop_reason=parsed.stop_reason)
        return parsed

    def _log_llm_call(
        self,
        phase: str,
        params: dict[str, Any],
        response_text: str,
        stop_reason: str | None = None,
    ) -> None:
        """Write a JSON record of an API call when a log directory is configured."""
        if self._llm_log_dir is None:
            return
        self._llm_log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        log_path = self._llm_log_dir / f"{timestamp}_{phase}_anthropic.json"

        request_data = {k: v for k, v in params.items() if k != "messages"}
        request_data["message_count"] = len(params.get("messages", []))

        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "phase": phase,
            "provider": "anthropic",
            "model": self.model,
            "request": request_data,
            "stop_reason": stop_reason,
            "response": response_text,
        }

        log_path.write_text(json.dumps(log_entry, indent=2, default=str))
        logger.debug("Logged %s call to %s", phase, log_path)
