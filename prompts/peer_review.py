"""Prompt templates for the academic peer-review pass over a section"""

from typing import Dict

from prompts.section_writing import render_sources_instruction


def get_peer_review_prompt(
    form: Dict,
    section_title: str,
    current_content: str,
) -> tuple[str, str]:
    """Get system and user prompts for reviewing and correcting a section

    The model returns the corrected section itself, not a list of comments.
    With ``blindPeerReview`` set the review runs in harsh double-blind mode.

    Args:
        form: Writing form values
        section_title: Title of the section
        current_content: Section text to review

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    system_prompt = """You are the senior review board of Harvard University Press.

Carry out a rigorous peer review of the section you are given and return the corrected section:
1. Fix scientific, logical and grammatical weaknesses
2. Check every source: is it credible, and is it cited correctly?
3. Raise the text to the standard of a Q1 journal
4. Keep the same language as the original text
5. Return Markdown only, without the section title or reviewer comments"""

    citation_style = form.get("citationStyle", "Harvard")

    user_prompt = f"""Work: {form.get("title", "")} ({form.get("type", "")}, {form.get("level", "")} level)
Section: {section_title}

Check that the {citation_style} citation style is applied correctly throughout."""

    if form.get("blindPeerReview"):
        user_prompt += (
            "\n\nThis is a double-blind peer review. Be merciless about scientific "
            "errors and make no compromises."
        )

    sources = render_sources_instruction(
        form,
        "When checking and correcting facts, rely only on the sources below. Do not "
        "bring in anything from outside them.",
    )
    if sources:
        user_prompt += f"\n\n{sources}"

    user_prompt += f"""

SECTION TEXT:
{current_content}

Provide the reviewed and corrected section."""

    return system_prompt, user_prompt
