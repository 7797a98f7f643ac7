"""Registry mapping each LLM task to its prompt file and expected reply shape."""

from dataclasses import dataclass


# JSON reply shape -> Python type after json.loads
OUTPUT_TYPES = {"array": list, "object": dict}


@dataclass
class PromptSpec:
    """Defines one LLM task.

    Attributes:
        name: Unique identifier, e.g. "remediation".
        prompt_file: Path of the template, relative to the repository root.
        output_type: Expected JSON reply shape: "array" or "object".
    """

    name: str
    prompt_file: str
    output_type: str = "array"

    def __post_init__(self):
        if self.output_type not in OUTPUT_TYPES:
            raise ValueError(
                f"Unknown output_type '{self.output_type}' for prompt '{self.name}'. "
                f"Expected one of {sorted(OUTPUT_TYPES)}"
            )


PROMPT_REGISTRY: list[PromptSpec] = [
    PromptSpec(
        name="remediation",
        prompt_file="prompts/remediation.txt",
        output_type="array",
    ),
]


def get_spec(name: str) -> PromptSpec:
    """Look up a PromptSpec by name; unknown names raise KeyError."""
    for spec in PROMPT_REGISTRY:
        if spec.name == name:
            return spec
    raise KeyError(f"Unknown prompt: {name}. Available: {[s.name for s in PROMPT_REGISTRY]}")
