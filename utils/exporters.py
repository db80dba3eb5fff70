"""LaTeX and Word (.doc) export of the document sections.

Both formats are plain string templates built from the in-memory
SectionList; every section is written exactly once, in list order.
"""
import html
import logging
import re
from datetime import date
from typing import Dict, Iterable, List, Optional

import markdown

from core.models import Section

logger = logging.getLogger(__name__)

_LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "$": r"\$",
    "&": r"\&",
    "%": r"\%",
    "#": r"\#",
    "^": r"\textasciicircum{}",
    "_": r"\_",
    "~": r"\textasciitilde{}",
}
_LATEX_ESCAPE_RE = re.compile("|".join(re.escape(c) for c in _LATEX_SPECIAL_CHARS))

# Arabic-script ranges (Sorani Kurdish, Arabic, Persian)
_RTL_RE = re.compile(r"[\u0600-\u06FF\u0750-\u077F\uFB50-\uFDFF\uFE70-\uFEFF]")


def escape_latex(text: str) -> str:
    """Escape LaTeX special characters in one pass"""
    if not text:
        return ""
    return _LATEX_ESCAPE_RE.sub(lambda m: _LATEX_SPECIAL_CHARS[m.group(0)], text)


def is_rtl(text: str) -> bool:
    return bool(_RTL_RE.search(text or ""))


def _inline_markdown_to_latex(line: str) -> str:
    """Escape a line, then convert **bold**, *italic* and `code`"""
    line = escape_latex(line)
    line = re.sub(r"\*\*(.+?)\*\*", r"\\textbf{\1}", line)
    line = re.sub(r"(?<!\*)\*([^*]+?)\*(?!\*)", r"\\textit{\1}", line)
    line = re.sub(r"`([^`]+)`", r"\\texttt{\1}", line)
    return line


def markdown_to_latex(markdown_text: str) -> str:
    """Convert the subset of Markdown the model produces into LaTeX body text"""
    if not markdown_text:
        return ""

    out: List[str] = []
    list_env: Optional[str] = None

    def close_list():
        nonlocal list_env
        if list_env:
            out.append(f"\\end{{{list_env}}}")
            list_env = None

    for raw in markdown_text.split("\n"):
        line = raw.rstrip()
        stripped = line.strip()

        heading = re.match(r"^(#{1,6})\s+(.*)$", stripped)
        bullet = re.match(r"^[-*+]\s+(.*)$", stripped)
        numbered = re.match(r"^\d+[.)]\s+(.*)$", stripped)

        if heading:
            close_list()
            command = "subsection*" if len(heading.group(1)) <= 2 else "subsubsection*"
            out.append(f"\\{command}{{{_inline_markdown_to_latex(heading.group(2))}}}")
        elif bullet or numbered:
            env = "itemize" if bullet else "enumerate"
            if list_env != env:
                close_list()
                out.append(f"\\begin{{{env}}}")
                list_env = env
            item = (bullet or numbered).group(1)
            out.append(f"  \\item {_inline_markdown_to_latex(item)}")
        elif not stripped:
            close_list()
            out.append("")
        else:
            close_list()
            out.append(_inline_markdown_to_latex(stripped))

    close_list()
    return "\n".join(out).strip()


def _latex_preamble(title: str, rtl: bool) -> List[str]:
    lines = [
        r"\documentclass[12pt,a4paper]{article}",
        r"\usepackage{fontspec}",
        r"\usepackage{polyglossia}",
    ]
    if rtl:
        lines += [
            r"\setdefaultlanguage{arabic}",
            r"\setotherlanguage{english}",
            r"\newfontfamily\arabicfont[Script=Arabic]{Noto Naskh Arabic}",
        ]
    else:
        lines.append(r"\setdefaultlanguage{english}")
    lines += [
        r"\usepackage[margin=2.5cm]{geometry}",
        r"\usepackage{hyperref}",
        "",
        f"\\title{{{escape_latex(title)}}}",
        r"\date{\today}",
    ]
    return lines


def export_latex(title: str, sections: Iterable[Section], form: Optional[Dict] = None) -> str:
    """Build a XeLaTeX source document

    Args:
        title: Document title
        sections: Sections in display order
        form: Writing form values (thesisCover, type, level are used)

    Returns:
        LaTeX source text
    """
    form = form or {}
    sections = list(sections)
    rtl = is_rtl(title) or any(is_rtl(s.title) or is_rtl(s.content) for s in sections)

    lines = _latex_preamble(title, rtl)
    lines += ["", r"\begin{document}", ""]

    if form.get("thesisCover"):
        lines += [
            r"\begin{titlepage}",
            r"\centering",
            r"\vspace*{4cm}",
            f"{{\\Huge\\bfseries {escape_latex(title)}\\par}}",
            r"\vspace{2cm}",
            f"{{\\Large {escape_latex(str(form.get('type', '')))}\\par}}",
            f"{{\\large {escape_latex(str(form.get('level', '')))}\\par}}",
            r"\vfill",
            f"{{\\large {date.today().isoformat()}\\par}}",
            r"\end{titlepage}",
        ]
    else:
        lines.append(r"\maketitle")
    lines += [r"\tableofcontents", ""]

    for section in sections:
        lines.append(f"\\section{{{escape_latex(section.title)}}}")
        lines.append("")
        body = markdown_to_latex(section.content)
        if body:
            lines.append(body)
            lines.append("")

    lines.append(r"\end{document}")
    logger.info(f"LaTeX export built for {len(sections)} sections")
    return "\n".join(lines) + "\n"


_DOC_TEMPLATE = """<html xmlns:o="urn:schemas-microsoft-com:office:office" xmlns:w="urn:schemas-microsoft-com:office:word" xmlns="http://www.w3.org/TR/REC-html40">
<head>
<meta charset="utf-8">
<title>{title}</title>
<!--[if gte mso 9]><xml><w:WordDocument><w:View>Print</w:View><w:Zoom>100</w:Zoom></w:WordDocument></xml><![endif]-->
<style>
body {{ font-family: 'Times New Roman', serif; font-size: 12pt; line-height: 1.6; }}
h1 {{ font-size: 16pt; }}
table {{ border-collapse: collapse; }}
td, th {{ border: 1px solid #000; padding: 4px; }}
</style>
</head>
<body dir="{direction}">
<h1 class="doc-title">{title}</h1>
{body}
</body>
</html>
"""


def export_word_doc(title: str, sections: Iterable[Section]) -> str:
    """Build Word-compatible HTML for saving with a .doc extension

    Args:
        title: Document title
        sections: Sections in display order

    Returns:
        HTML text
    """
    sections = list(sections)
    rtl = is_rtl(title) or any(is_rtl(s.title) or is_rtl(s.content) for s in sections)

    parts = []
    for section in sections:
        parts.append(f'<h1 class="section-title">{html.escape(section.title)}</h1>')
        if section.content:
            parts.append(markdown.markdown(section.content, extensions=["tables"]))
        parts.append('<br clear="all" style="page-break-before:always">')

    logger.info(f"Word export built for {len(sections)} sections")
    return _DOC_TEMPLATE.format(
        title=html.escape(title),
        direction="rtl" if rtl else "ltr",
        body="\n".join(parts),
    )


def export_filename(title: str, extension: str) -> str:
    """Safe download filename derived from the title"""
    stem = re.sub(r"[^\w\-]+", "_", (title or "").strip()).strip("_")[:80]
    return f"{stem or 'document'}.{extension.lstrip('.')}"
