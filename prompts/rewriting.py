"""Prompt templates for rewriting (humanizing) an existing section"""

from typing import Dict

from prompts.section_writing import render_sources_instruction


def get_rewrite_prompt(
    form: Dict,
    section_title: str,
    current_content: str,
    instruction: str = "",
) -> tuple[str, str]:
    """Get system and user prompts for rewriting a section

    Args:
        form: Writing form values
        section_title: Title of the section
        current_content: Section text to rewrite
        instruction: Optional user request (e.g. "make it more concise")

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    system_prompt = """You are an expert academic editor revising a section of a scholarly work.

Your task is to rewrite the section so that it reads as natural, fluent human academic prose while:
1. Keeping every claim, figure and citation of the original
2. Varying sentence length and structure
3. Removing repetitive or formulaic phrasing
4. Keeping the same language as the original text
5. Returning Markdown only, without the section title"""

    request = instruction.strip() or "Improve fluency and make the prose read naturally."

    user_prompt = (
        f'Work: {form.get("title", "")} ({form.get("type", "")}, {form.get("level", "")} level)\n'
        f"Section: {section_title}\n\n"
        f'REVISION REQUEST:\n"{request}"'
    )

    sources = render_sources_instruction(
        form,
        "Use ONLY the sources below for information. Do not bring in anything "
        "from outside them.",
    )
    if sources:
        user_prompt += f"\n\n{sources}"

    user_prompt += f"""

CURRENT SECTION TEXT:
{current_content}

Provide the rewritten section."""

    return system_prompt, user_prompt
