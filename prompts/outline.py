"""Prompt templates for outline (section title) generation"""

from typing import Dict


def get_outline_prompt(form: Dict) -> tuple[str, str]:
    """Get system and user prompts for drafting the section outline

    Args:
        form: Writing form values

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    system_prompt = (
        "You are a senior editor at Harvard University Press. You design the "
        "structure of academic works to Harvard's standard of rigour."
    )

    user_prompt = f"""Design the structure and section titles of this work:
Title: {form.get("title", "")}
Subject: {form.get("topic", "")}
Type: {form.get("type", "")}
Level: {form.get("level", "")}
Length: {form.get("pages", 10)} pages

Give me ONLY the section titles as a numbered list, one per line, with no other text.
Choose a number of sections that suits this length."""

    return system_prompt, user_prompt
