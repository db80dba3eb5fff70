"""Prompt templates for writing one document section"""

from typing import Dict, List

from prompts.feature_fragments import render_feature_instructions

WORDS_PER_PAGE = 300


def get_section_writing_prompt(
    form: Dict,
    section_title: str,
    previous_context: str = "",
    section_index: int = 0,
    section_count: int = 1,
) -> tuple[str, str]:
    """Get system and user prompts for writing a single section

    Args:
        form: Writing form values
        section_title: Title of the section to write
        previous_context: Tail of the sections already written
        section_index: Zero-based position of the section in the document
        section_count: Number of sections in the document

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    system_prompt = f"""You are a distinguished professor and senior editor at Harvard University Press, acting as {form.get("role", "Author")}.
You write to Harvard's strict academic standards:
1. The language is highly formal, academic and neutral.
2. Avoid emotional wording and personal expression.
3. Every claim is supported by evidence and logic.

Write in well-structured Markdown. Do not repeat the section title as a heading."""

    rules = _render_core_rules(form, section_index)
    features = render_feature_instructions(form)

    target_words = _target_words(form, section_count)

    user_prompt = f"""You are writing the following work:
Title: {form.get("title", "")}
Subject: {form.get("topic", "")}
Type: {form.get("type", "")}
Level: {form.get("level", "")}
Creativity (temperature): {form.get("temperature", 0.7)}

Write ONLY the section titled: "{section_title}" (section {section_index + 1} of {section_count}).
Target length: about {target_words} words."""

    if rules:
        user_prompt += f"\n\nADDITIONAL RULES:\n{rules}"
    if features:
        user_prompt += f"\n\nADVANCED FEATURES TO APPLY:\n{features}"

    sources = render_sources_instruction(
        form,
        "Use ONLY the sources below for information. Do not bring in anything from "
        "outside them. If something is not covered by these sources, say that it is "
        "not available.",
    )
    if sources:
        user_prompt += f"\n\n{sources}"

    if previous_context:
        user_prompt += (
            "\n\nTEXT ALREADY WRITTEN (for continuity; do not repeat it):\n"
            f"{previous_context}"
        )

    return system_prompt, user_prompt


def _render_core_rules(form: Dict, section_index: int) -> str:
    """Numbered rules driven by the non-feature options, in fixed order"""
    rules: List[str] = []

    if form.get("superRole"):
        rules.append(
            "(Most important) You are at once a brilliant writer, a very harsh critic "
            "and a meticulous reviewer. Write the text as if it had already been "
            "drafted, harshly critiqued and fully refined, leaving no gaps."
        )
    if form.get("dialectic"):
        rules.append("Structure the analysis as thesis, antithesis and synthesis.")
    if form.get("includeReferences"):
        rules.append(f"Cite sources using the {form.get('citationStyle', 'Harvard')} style.")
        rules.append(f"Rely only on this kind of source: {form.get('referenceType', '')}.")
    if form.get("dataFocus"):
        rules.append("Rely on real statistics and scientific data.")
    if form.get("doiLinking"):
        rules.append(
            "For every source you use, give its DOI (Digital Object Identifier) "
            "or official URL when available."
        )
    if form.get("enableDataViz"):
        rules.append("Present key data in Markdown tables where it helps the reader.")
    if form.get("crossRefCheck"):
        rules.append("Only cite works whose metadata can be verified in Crossref.")
    if form.get("plagiarismCheck"):
        rules.append("The text must be entirely original; paraphrase rather than quote at length.")
    if form.get("thesisCover") and section_index == 0:
        rules.append(
            "Begin with a thesis cover page listing the title, author placeholder, "
            "institution placeholder and date."
        )

    style_text = (form.get("styleText") or "").strip()
    if style_text:
        rules.append(f"Imitate the writing style of this sample:\n\"\"\"\n{style_text}\n\"\"\"")

    text1 = (form.get("compareText1") or "").strip()
    text2 = (form.get("compareText2") or "").strip()
    if text1 and text2:
        basis = (form.get("compareBasis") or "").strip() or "their main arguments"
        rules.append(
            f"Compare the two texts below on the basis of {basis}.\n"
            f"Text A:\n\"\"\"\n{text1}\n\"\"\"\nText B:\n\"\"\"\n{text2}\n\"\"\""
        )

    return "\n".join(f"{i}. {rule}" for i, rule in enumerate(rules, 1))


def _target_words(form: Dict, section_count: int) -> int:
    try:
        pages = max(int(form.get("pages", 1)), 1)
    except (TypeError, ValueError):
        pages = 1
    return max(pages * WORDS_PER_PAGE // max(section_count, 1), 150)


def build_previous_context(written: List[str], max_chars: int) -> str:
    """Join already-written section texts and keep the last max_chars characters"""
    text = "\n\n".join(t for t in written if t)
    if len(text) <= max_chars:
        return text
    return text[-max_chars:]


def render_sources_instruction(form: Dict, lead: str) -> str:
    """CRITICAL block restricting the model to the user's own sources, empty when none are given"""
    sources = (form.get("customSources") or "").strip()
    if not sources:
        return ""
    return f"CRITICAL: {lead}\nSources:\n{sources}"
