"""Tests for form options and prompt assembly"""
import pytest

from core.errors import FormValidationError
from prompts.feature_fragments import FEATURE_FRAGMENTS, render_feature_instructions
from prompts.form_options import (
    ALL_FEATURES,
    FEATURE_GROUPS,
    FORM_DEFAULTS,
    REVIEW_ONLY_FEATURES,
    enabled_features,
    merge_form,
    new_form,
    validate_form,
)
from prompts.outline import get_outline_prompt
from prompts.peer_review import get_peer_review_prompt
from prompts.rewriting import get_rewrite_prompt
from prompts.section_writing import build_previous_context, get_section_writing_prompt


def test_every_feature_has_a_fragment_and_default():
    assert len(ALL_FEATURES) == 70
    assert len(set(ALL_FEATURES)) == len(ALL_FEATURES)
    assert set(FEATURE_FRAGMENTS) | REVIEW_ONLY_FEATURES == set(ALL_FEATURES)
    assert not set(FEATURE_FRAGMENTS) & REVIEW_ONLY_FEATURES
    for key in ALL_FEATURES:
        assert FORM_DEFAULTS[key] is False


def test_new_form_rejects_unknown_options():
    with pytest.raises(FormValidationError):
        new_form(notAnOption=True)


def test_merge_form_drops_unknown_and_fills_defaults():
    merged = merge_form({"title": "X", "retiredOption": 1})
    assert merged["title"] == "X"
    assert "retiredOption" not in merged
    assert merged["pages"] == FORM_DEFAULTS["pages"]


def test_validate_form(form):
    assert validate_form(form) == []
    bad = dict(form, title="  ", pages=0, temperature=1.5)
    assert validate_form(bad) == ["title_required", "pages_invalid", "temperature_invalid"]
    assert "pages_invalid" in validate_form(dict(form, pages="many"))


def test_prompt_assembly_is_deterministic(form):
    form.update(counterArgument=True, marxism=True, dialectic=True)
    first = get_section_writing_prompt(form, "Introduction", "earlier text", 0, 4)
    second = get_section_writing_prompt(dict(form), "Introduction", "earlier text", 0, 4)
    assert first == second


def test_disabled_flags_contribute_nothing(form):
    assert render_feature_instructions(form) == ""
    _, user_prompt = get_section_writing_prompt(form, "Introduction")
    for fragment in FEATURE_FRAGMENTS.values():
        assert fragment not in user_prompt


def test_enabled_flags_render_in_fixed_group_order(form):
    # set in reverse order; output must still follow FEATURE_GROUPS order
    form.update(corporateGovernance=True, etymology=True, counterArgument=True)
    lines = render_feature_instructions(form).split("\n")
    assert lines == [
        f"- {FEATURE_FRAGMENTS['counterArgument']}",
        f"- {FEATURE_FRAGMENTS['etymology']}",
        f"- {FEATURE_FRAGMENTS['corporateGovernance']}",
    ]


def test_each_enabled_flag_appears_once(form):
    for key in FEATURE_GROUPS["precision"]:
        form[key] = True
    _, user_prompt = get_section_writing_prompt(form, "Methods")
    for key in FEATURE_GROUPS["precision"]:
        assert user_prompt.count(FEATURE_FRAGMENTS[key]) == 1


def test_core_rules(form):
    form.update(includeReferences=True, citationStyle="APA 7th", doiLinking=False, dialectic=True)
    _, user_prompt = get_section_writing_prompt(form, "Introduction")
    assert "APA 7th" in user_prompt
    assert "thesis, antithesis and synthesis" in user_prompt
    assert "DOI" not in user_prompt

    form.update(includeReferences=False)
    _, user_prompt = get_section_writing_prompt(form, "Introduction")
    assert "APA 7th" not in user_prompt


def test_thesis_cover_only_on_first_section(form):
    form["thesisCover"] = True
    _, first = get_section_writing_prompt(form, "Intro", section_index=0, section_count=3)
    _, second = get_section_writing_prompt(form, "Body", section_index=1, section_count=3)
    assert "cover page" in first
    assert "cover page" not in second


def test_custom_sources_and_context(form):
    form["customSources"] = "Smith (2020). Rivers of the Zagros."
    _, user_prompt = get_section_writing_prompt(form, "Hydrology", previous_context="PREVIOUS TAIL")
    assert "Use ONLY the sources below" in user_prompt
    assert "Rivers of the Zagros" in user_prompt
    assert "PREVIOUS TAIL" in user_prompt


def test_comparison_requires_both_texts(form):
    form["compareText1"] = "Text one"
    _, user_prompt = get_section_writing_prompt(form, "Comparison")
    assert "Compare the two texts" not in user_prompt
    form["compareText2"] = "Text two"
    _, user_prompt = get_section_writing_prompt(form, "Comparison")
    assert "Compare the two texts" in user_prompt
    assert "their main arguments" in user_prompt


def test_build_previous_context_keeps_tail():
    assert build_previous_context(["abc", "", "def"], 100) == "abc\n\ndef"
    assert build_previous_context(["abcdef", "ghij"], 4) == "ghij"


def test_outline_prompt_mentions_form_fields(form):
    system_prompt, user_prompt = get_outline_prompt(form)
    assert "Water Scarcity in Kurdistan" in user_prompt
    assert "10 pages" in user_prompt
    assert system_prompt


def test_super_role_is_the_first_rule(form):
    form.update(superRole=True, dialectic=True)
    _, user_prompt = get_section_writing_prompt(form, "Introduction")
    rules = user_prompt.split("ADDITIONAL RULES:\n", 1)[1]
    assert rules.startswith("1. (Most important) You are at once a brilliant writer")
    assert "2. Structure the analysis as thesis" in rules

    form["superRole"] = False
    _, user_prompt = get_section_writing_prompt(form, "Introduction")
    assert "harsh critic" not in user_prompt


def test_enabled_features_by_group(form):
    form.update(etymology=True, counterArgument=True)
    assert enabled_features(form) == ["counterArgument", "etymology"]
    assert enabled_features(form, "linguistics") == ["etymology"]
    assert enabled_features(form, "legal") == []


def test_blind_review_only_steers_the_review_prompt(form):
    form["blindPeerReview"] = True
    _, writing_prompt = get_section_writing_prompt(form, "Introduction")
    assert render_feature_instructions(form) == ""
    assert "double-blind" not in writing_prompt.lower()

    _, review_prompt = get_peer_review_prompt(form, "Introduction", "Draft text.")
    assert "double-blind peer review" in review_prompt
    form["blindPeerReview"] = False
    _, review_prompt = get_peer_review_prompt(form, "Introduction", "Draft text.")
    assert "double-blind" not in review_prompt


def test_review_prompt_checks_citations_against_sources(form):
    form.update(citationStyle="Vancouver", customSources="Smith (2020). Rivers of the Zagros.")
    system_prompt, user_prompt = get_peer_review_prompt(form, "Hydrology", "Draft text.")
    assert "peer review" in system_prompt
    assert "Vancouver citation style" in user_prompt
    assert "rely only on the sources below" in user_prompt
    assert "Rivers of the Zagros" in user_prompt
    assert user_prompt.index("Rivers of the Zagros") < user_prompt.index("Draft text.")


def test_rewrite_prompt_includes_custom_sources(form):
    _, user_prompt = get_rewrite_prompt(form, "Hydrology", "Draft text.")
    assert "CRITICAL" not in user_prompt

    form["customSources"] = "Smith (2020). Rivers of the Zagros."
    _, user_prompt = get_rewrite_prompt(form, "Hydrology", "Draft text.", "shorter please")
    assert "Use ONLY the sources below" in user_prompt
    assert "Rivers of the Zagros" in user_prompt
    assert '"shorter please"' in user_prompt
    assert user_prompt.rstrip().endswith("Provide the rewritten section.")
