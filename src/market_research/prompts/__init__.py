"""Prompt templates for market research sessions.

Templates live next to this module as .md/.txt files so they can be tuned
without touching code. They use str.format() placeholders:
- {variable_name} - replaced with the value
- Use {{ and }} to escape literal braces
"""

from pathlib import Path


PROMPTS_DIR = Path(__file__).parent

PRESET_QUERIES: list[str] = [
    "Find top 5 competitors and compare pricing & features",
    "Summarize customer pain points from reviews and blogs",
    "Suggest a unique positioning strategy for our startup",
]


def load_prompt(name: str) -> str:
    """Load a prompt template by name.

    Args:
        name: Prompt filename without extension, or with extension.
              e.g., "system", "research_request", "system.md"

    Returns:
        The prompt template as a string.

    Raises:
        FileNotFoundError: If the prompt file doesn't exist.
    """
    if "." not in name:
        for ext in [".txt", ".md"]:
            path = PROMPTS_DIR / f"{name}{ext}"
            if path.exists():
                return path.read_text()
        raise FileNotFoundError(f"Prompt '{name}' not found in {PROMPTS_DIR}")

    path = PROMPTS_DIR / name
    if not path.exists():
        raise FileNotFoundError(f"Prompt file not found: {path}")
    return path.read_text()


def get_system_prompt() -> str:
    """Get the system instruction describing the five report sections."""
    return load_prompt("system").strip()


def build_user_prompt(subject_description: str, query: str) -> str:
    """Substitute the description and query verbatim into the request template."""
    template = load_prompt("research_request").strip()
    return template.format(subject_description=subject_description, query=query)


def get_tool_result_ack() -> str:
    """Fixed payload reported back for every tool invocation."""
    return load_prompt("tool_result").strip()
