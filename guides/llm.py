"""
LLM client abstraction used for optional remediation review of checker findings.

Providers: Anthropic (default) and OpenAI. Set ANTHROPIC_API_KEY or
OPENAI_API_KEY in the environment or the repository .env file.
"""
from __future__ import annotations

import json
import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from . import config  # noqa: F401  (loads .env)
from .config import DEFAULT_MODEL


@dataclass
class LLMResponse:
    """Raw response from an LLM."""
    content: str
    model: str
    provider: str
    finish_reason: str | None = None
    input_tokens: int | None = None
    output_tokens: int | None = None


class BaseLLM(ABC):
    """Abstract LLM client."""

    @property
    @abstractmethod
    def provider(self) -> str:
        ...

    @property
    @abstractmethod
    def default_model(self) -> str:
        ...

    @abstractmethod
    def complete(self, prompt: str, *, model: str | None = None, max_tokens: int = 2048) -> LLMResponse:
        ...


class AnthropicLLM(BaseLLM):
    """Anthropic API (Claude)."""

    def __init__(self, model: str = DEFAULT_MODEL, api_key: str | None = None):
        self._model = model
        self._api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")

    @property
    def provider(self) -> str:
        return "anthropic"

    @property
    def default_model(self) -> str:
        return self._model

    def complete(self, prompt: str, *, model: str | None = None, max_tokens: int = 2048) -> LLMResponse:
        if not self._api_key:
            raise EnvironmentError("ANTHROPIC_API_KEY not set")
        from anthropic import Anthropic

        client = Anthropic(api_key=self._api_key)
        model = model or self._model
        msg = client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=0.1,
            messages=[{"role": "user", "content": prompt}],
        )
        text = "".join(block.text for block in msg.content if getattr(block, "type", None) == "text")
        usage = getattr(msg, "usage", None)
        return LLMResponse(
            content=text,
            model=model,
            provider=self.provider,
            finish_reason=getattr(msg, "stop_reason", None),
            input_tokens=getattr(usage, "input_tokens", None) if usage else None,
            output_tokens=getattr(usage, "output_tokens", None) if usage else None,
        )


class OpenAILLM(BaseLLM):
    """OpenAI API (GPT-4o etc.)."""

    def __init__(self, model: str = "gpt-4o-mini", api_key: str | None = None):
        self._model = model
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY")

    @property
    def provider(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return self._model

    def complete(self, prompt: str, *, model: str | None = None, max_tokens: int = 2048) -> LLMResponse:
        if not self._api_key:
            raise EnvironmentError("OPENAI_API_KEY not set")
        from openai import OpenAI

        client = OpenAI(api_key=self._api_key)
        model = model or self._model
        resp = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
        )
        choice = resp.choices[0]
        usage = getattr(resp, "usage", None)
        return LLMResponse(
            content=choice.message.content or "",
            model=model,
            provider=self.provider,
            finish_reason=getattr(choice, "finish_reason", None),
            input_tokens=getattr(usage, "prompt_tokens", None) if usage else None,
            output_tokens=getattr(usage, "completion_tokens", None) if usage else None,
        )


def get_llm(provider: str, model: str | None = None) -> BaseLLM:
    """Factory for the supported providers: anthropic, openai."""
    if provider == "anthropic":
        return AnthropicLLM(model=model or DEFAULT_MODEL)
    if provider == "openai":
        return OpenAILLM(model=model or "gpt-4o-mini")
    raise ValueError(f"Unknown provider: {provider}")


# ==========================================================
# REMEDIATION REVIEW
# ==========================================================

def strip_code_fence(text: str) -> str:
    """Remove ```json ... ``` wrappers from an LLM response string."""
    m = re.search(r"```(?:json)?\s*\n?(.*?)```", text, re.DOTALL)
    return m.group(1).strip() if m else text.strip()


def parse_json_response(text: str):
    try:
        return json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise ValueError(f"LLM response is not valid JSON: {e}") from e


def review_findings(llm: BaseLLM, markup: str, issues: list[dict], *, prompt: str = "remediation",
                    max_tokens: int = 4096) -> tuple[list, LLMResponse]:
    """Ask the model for a concrete fix per finding.

    Returns ``(suggestions, response)``; suggestions is the parsed JSON reply,
    checked against the prompt's ``output_type``.
    """
    from prompts.registry import get_spec
    from prompts.templates import check_output, render_prompt

    spec = get_spec(prompt)
    resp = llm.complete(render_prompt(spec, markup, issues), max_tokens=max_tokens)
    suggestions = check_output(spec, parse_json_response(resp.content))
    return suggestions, resp
