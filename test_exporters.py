"""Tests for LaTeX and Word exports"""
from core.models import SectionList
from utils.exporters import (
    escape_latex,
    export_filename,
    export_latex,
    export_word_doc,
    markdown_to_latex,
)


def _sections():
    sections = SectionList.from_titles(["Opening Remarks", "Core Analysis", "Closing Thoughts"])
    sections[0].append("Alpha paragraph text.")
    sections[1].append("Beta paragraph text.")
    sections[2].append("Gamma paragraph text.")
    return sections


def _assert_once_in_order(document: str, needles):
    positions = []
    for needle in needles:
        assert document.count(needle) == 1, needle
        positions.append(document.index(needle))
    assert positions == sorted(positions)


def test_latex_contains_each_section_once_in_order():
    sections = _sections()
    tex = export_latex("Water Policy", sections)

    assert tex.startswith("\\documentclass")
    assert tex.rstrip().endswith("\\end{document}")
    _assert_once_in_order(tex, [s.title for s in sections])
    assert "\\section{Opening Remarks}" in tex
    assert "\\addcontentsline" not in tex
    _assert_once_in_order(tex, [s.content for s in sections])


def test_word_doc_contains_each_section_once_in_order():
    sections = _sections()
    doc = export_word_doc("Water Policy", sections)

    assert 'xmlns:w="urn:schemas-microsoft-com:office:word"' in doc
    _assert_once_in_order(doc, [s.title for s in sections])
    _assert_once_in_order(doc, [s.content for s in sections])
    assert "<p>Alpha paragraph text.</p>" in doc


def test_word_doc_escapes_titles():
    sections = SectionList.from_titles(["<script>x</script>"])
    doc = export_word_doc("A & B", sections)
    assert "<script>" not in doc
    assert "A &amp; B" in doc


def test_escape_latex_special_characters():
    assert escape_latex("50% of $x & y_1") == r"50\% of \$x \& y\_1"
    assert escape_latex("a\\b") == r"a\textbackslash{}b"
    assert escape_latex("") == ""


def test_markdown_to_latex_formatting():
    text = "## Background\nThis is **bold** and *italic*.\n\n- one\n- two\n\n1. first"
    tex = markdown_to_latex(text)
    assert "\\subsection*{Background}" in tex
    assert "\\textbf{bold}" in tex
    assert "\\textit{italic}" in tex
    assert "\\begin{itemize}\n  \\item one\n  \\item two\n\\end{itemize}" in tex
    assert "\\begin{enumerate}\n  \\item first\n\\end{enumerate}" in tex


def test_rtl_content_switches_latex_language():
    sections = SectionList.from_titles(["پێشەکی"])
    tex = export_latex("ئاو", sections)
    assert "\\setdefaultlanguage{arabic}" in tex
    assert 'dir="rtl"' in export_word_doc("ئاو", sections)


def test_thesis_cover_replaces_maketitle():
    sections = _sections()
    tex = export_latex("Water Policy", sections, {"thesisCover": True, "type": "Book", "level": "Professor"})
    assert "\\begin{titlepage}" in tex
    assert "\\maketitle" not in tex


def test_export_filename():
    assert export_filename("Water: Policy / 2024", "tex") == "Water_Policy_2024.tex"
    assert export_filename("", ".doc") == "document.doc"
