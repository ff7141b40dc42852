"""LLM prompts for error analysis.

The error text is embedded verbatim apart from length bounding. Nothing here
guards against prompt injection: text that reads like instructions reaches
the model as-is.
"""

TRUNCATION_MARKER = "\n... [truncated]"


def bound_error_text(error_text: str, max_chars: int) -> str:
    """Cut error text down to ``max_chars`` characters, marking the cut."""
    if len(error_text) <= max_chars:
        return error_text
    return error_text[:max_chars] + TRUNCATION_MARKER


def get_analysis_prompt(error_text: str, max_chars: int) -> str:
    """Generate the user prompt asking for an explanation and fix."""
    return f"Analyze this error log and provide solutions: {bound_error_text(error_text, max_chars)}"


def build_messages(system_prompt: str, error_text: str, max_chars: int) -> list[dict[str, str]]:
    """Build the chat-completion message list."""
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": get_analysis_prompt(error_text, max_chars)},
    ]
