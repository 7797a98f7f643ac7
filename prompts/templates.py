"""Render checker findings into a prompt and validate the model's JSON reply."""

import json
from functools import lru_cache
from pathlib import Path

from .registry import OUTPUT_TYPES, PromptSpec

PROJECT_ROOT = Path(__file__).resolve().parent.parent

PLACEHOLDER = "{payload}"


@lru_cache(maxsize=None)
def _read_template(path: Path) -> str:
    # lines starting with "#" before the prompt text are maintainer notes
    lines = path.read_text(encoding="utf-8").splitlines()
    while lines and (lines[0].startswith("#") or not lines[0].strip()):
        lines.pop(0)
    return "\n".join(lines).strip()


def load_template(spec: PromptSpec) -> str:
    template = _read_template(PROJECT_ROOT / spec.prompt_file)
    if PLACEHOLDER not in template:
        raise ValueError(f"Prompt '{spec.name}' ({spec.prompt_file}) has no {PLACEHOLDER} placeholder")
    return template


def finding_payload(markup: str, issues: list[dict]) -> dict:
    """The reviewed snippet plus the fields of each finding the model needs."""
    findings = []
    for i in issues:
        location = i.get("location") or {}
        findings.append({
            "rule_id": i["rule_id"],
            "rule_name": i["rule_name"],
            "wcag": i["wcag"],
            "css_path": location.get("css_path") or location.get("selector"),
            "description": i["description"],
        })
    return {"markup": markup, "findings": findings}


def render_prompt(spec: PromptSpec, markup: str, issues: list[dict]) -> str:
    payload = json.dumps(finding_payload(markup, issues), indent=2, ensure_ascii=False)
    return load_template(spec).replace(PLACEHOLDER, payload)


def check_output(spec: PromptSpec, data):
    """Return *data* if it has the JSON shape *spec* expects; else ValueError."""
    if not isinstance(data, OUTPUT_TYPES[spec.output_type]):
        raise ValueError(
            f"Prompt '{spec.name}' expects a JSON {spec.output_type}, got {type(data).__name__}"
        )
    return data
