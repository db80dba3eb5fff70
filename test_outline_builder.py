"""Tests for outline parsing and building"""
import pytest

from core.errors import GenerationError
from core.outline_builder import OutlineBuilder, fallback_titles, parse_outline


def test_parse_outline_strips_numbering_and_blank_lines():
    text = "1. Introduction\n\n2- Literature Review\n3) Methods\n- Results\n**4. Discussion**\n## Conclusion\n"
    assert parse_outline(text) == [
        "Introduction", "Literature Review", "Methods", "Results", "Discussion", "Conclusion",
    ]


def test_parse_outline_keeps_non_latin_titles():
    assert parse_outline("1. پێشەکی\n2. ئەنجام") == ["پێشەکی", "ئەنجام"]


def test_fallback_titles_sized_to_pages():
    assert len(fallback_titles(1)) == 3
    assert len(fallback_titles(20)) == 4
    assert len(fallback_titles(21)) == 5
    assert fallback_titles(5)[0] == "Section 1"


def test_custom_outline_skips_the_model(fake_llm, form):
    llm = fake_llm()
    form.update(useCustomOutline=True, customOutline="Preface\n\n  Chapter One  \nEpilogue\n")

    sections = OutlineBuilder(llm).build(form)

    assert [s.title for s in sections] == ["Preface", "Chapter One", "Epilogue"]
    assert sections.ids == [1, 2, 3]
    assert llm.calls == []


def test_blank_custom_outline_falls_through_to_model(fake_llm, form):
    llm = fake_llm(responses=["1. Intro\n2. Body"])
    form.update(useCustomOutline=True, customOutline="   \n")

    sections = OutlineBuilder(llm).build(form)

    assert [s.title for s in sections] == ["Intro", "Body"]
    assert llm.calls[0][2]["temperature"] == 0.3


def test_empty_model_outline_uses_fallback(fake_llm, form):
    llm = fake_llm(responses=["\n \n"])
    form["pages"] = 30
    sections = OutlineBuilder(llm).build(form)
    assert [s.title for s in sections] == [f"Section {i}" for i in range(1, 7)]


def test_model_failure_raises_generation_error(fake_llm, form):
    llm = fake_llm(responses=[RuntimeError("503")])
    with pytest.raises(GenerationError):
        OutlineBuilder(llm).build(form)


def test_parse_outline_keeps_leading_digits_in_titles():
    text = "1. 2-Dimensional Analysis\n3D Modelling\n2. 1990s Drought Records"
    assert parse_outline(text) == ["2-Dimensional Analysis", "3D Modelling", "1990s Drought Records"]
