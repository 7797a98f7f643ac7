import json

import pytest

from audit_checks import run_checklists
from guides.llm import (
    AnthropicLLM,
    BaseLLM,
    LLMResponse,
    OpenAILLM,
    get_llm,
    parse_json_response,
    review_findings,
    strip_code_fence,
)
from prompts.registry import PromptSpec, get_spec
from prompts.templates import check_output, finding_payload, load_template, render_prompt


class FakeLLM(BaseLLM):
    def __init__(self, content):
        self.content = content
        self.prompts = []

    @property
    def provider(self):
        return "fake"

    @property
    def default_model(self):
        return "fake-1"

    def complete(self, prompt, *, model=None, max_tokens=2048):
        self.prompts.append(prompt)
        return LLMResponse(content=self.content, model=self.default_model, provider=self.provider,
                           input_tokens=10, output_tokens=5)


def test_remediation_template():
    spec = get_spec("remediation")
    assert spec.output_type == "array"
    template = load_template(spec)
    assert template.startswith("You are a web accessibility specialist")
    assert template.count("{payload}") == 1


def test_render_prompt_embeds_findings():
    issues = run_checklists('<img src="chart.png">')
    prompt = render_prompt(get_spec("remediation"), '<img src="chart.png">', issues)
    assert "{payload}" not in prompt
    assert '"markup": "<img src=\\"chart.png\\">"' in prompt
    assert '"css_path": "html > body > img"' in prompt


def test_css_findings_use_selector_as_path():
    css_issue = {"rule_id": "FOCUS_002", "rule_name": "Focus removed", "wcag": ["2.4.7"],
                 "location": {"selector": ".btn:focus", "line": 1}, "description": "d"}
    payload = finding_payload(".btn:focus { outline: none; }", [css_issue])
    assert payload["findings"][0]["css_path"] == ".btn:focus"


def test_template_errors(tmp_path):
    with pytest.raises(KeyError):
        get_spec("nope")
    with pytest.raises(ValueError):
        PromptSpec(name="r", prompt_file="prompts/remediation.txt", output_type="csv")

    no_payload = tmp_path / "p.txt"
    no_payload.write_text("# notes {payload}\nNo placeholder here.\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_template(PromptSpec(name="p", prompt_file=str(no_payload)))


def test_check_output_follows_output_type():
    assert check_output(get_spec("remediation"), [{"rule_id": "X"}]) == [{"rule_id": "X"}]
    with pytest.raises(ValueError):
        check_output(get_spec("remediation"), {"rule_id": "X"})
    summary = PromptSpec(name="summary", prompt_file="prompts/remediation.txt", output_type="object")
    assert check_output(summary, {"ok": True}) == {"ok": True}


def test_strip_code_fence():
    assert strip_code_fence('```json\n[1, 2]\n```') == "[1, 2]"
    assert strip_code_fence("  [1]  ") == "[1]"
    assert parse_json_response("```\n{\"a\": 1}\n```") == {"a": 1}
    with pytest.raises(ValueError):
        parse_json_response("Sure! Here are the fixes.")


def test_review_findings_fills_prompt():
    markup = '<img src="chart.png">'
    issues = run_checklists(markup)
    reply = [{"rule_id": "NON_TEXT_001", "explanation": "Add alt.", "fixed_markup": '<img src="chart.png" alt="">'}]
    llm = FakeLLM("```json\n" + json.dumps(reply) + "\n```")

    suggestions, resp = review_findings(llm, markup, issues)

    assert suggestions == reply
    assert resp.input_tokens == 10
    prompt = llm.prompts[0]
    assert '"rule_id": "NON_TEXT_001"' in prompt
    assert '"css_path": "html > body > img"' in prompt
    assert "{payload}" not in prompt


def test_review_findings_rejects_non_array():
    with pytest.raises(ValueError):
        review_findings(FakeLLM('{"rule_id": "X"}'), "<p></p>", [])
    with pytest.raises(ValueError):
        review_findings(FakeLLM("not json"), "<p></p>", [])


def test_get_llm(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    llm = get_llm("anthropic", model="claude-test")
    assert isinstance(llm, AnthropicLLM)
    assert (llm.provider, llm.default_model) == ("anthropic", "claude-test")
    assert isinstance(get_llm("openai"), OpenAILLM)
    with pytest.raises(ValueError):
        get_llm("gemini")


def test_missing_api_key_raises_at_call_time(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(EnvironmentError):
        AnthropicLLM().complete("hi")
    with pytest.raises(EnvironmentError):
        OpenAILLM().complete("hi")
