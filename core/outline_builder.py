"""Build the section outline for a new document"""
import logging
import math
import re
from typing import Dict, List

import config
from core.errors import GenerationError
from core.llm_client import LLMClient
from core.models import SectionList
from prompts.outline import get_outline_prompt

logger = logging.getLogger(__name__)

# "1. ", "2- ", "3) ", "- ", "* ", "## " prefixes produced by the model
_NUMBERING_RE = re.compile(r"^\s*(?:#+\s*|[-*•]\s+)?(?:\d+\s*[.\-)](?=\s|$)\s*)?")


def parse_outline(text: str) -> List[str]:
    """Split model output into section titles

    Blank lines are dropped and leading list numbering or bullets removed.
    """
    titles = []
    for line in (text or "").split("\n"):
        if not line.strip():
            continue
        title = line.strip().strip("*").strip()
        title = _NUMBERING_RE.sub("", title, count=1).strip().strip("*").strip()
        if title:
            titles.append(title)
    return titles


def parse_custom_outline(text: str) -> List[str]:
    return [line.strip() for line in (text or "").split("\n") if line.strip()]


def fallback_titles(pages: int) -> List[str]:
    count = max(3, math.ceil(max(int(pages), 1) / 5))
    return [f"Section {i}" for i in range(1, count + 1)]


class OutlineBuilder:
    """Turn the writing form into an initial SectionList"""

    def __init__(self, llm_client: LLMClient = None):
        self.llm_client = llm_client

    def build(self, form: Dict) -> SectionList:
        """Create the section list for the form

        A non-empty custom outline is used verbatim without calling the
        model. Otherwise the model proposes titles; if it returns nothing
        usable, generic sections sized to the page count are used.

        Args:
            form: Writing form values

        Returns:
            SectionList with ids starting at 1, all pending
        """
        if form.get("useCustomOutline"):
            titles = parse_custom_outline(form.get("customOutline", ""))
            if titles:
                logger.info(f"Using custom outline with {len(titles)} sections")
                return SectionList.from_titles(titles)

        if self.llm_client is None:
            raise GenerationError("No LLM client configured for outline generation")

        system_prompt, user_prompt = get_outline_prompt(form)
        try:
            outline_text = self.llm_client.generate(
                prompt=user_prompt,
                system_prompt=system_prompt,
                temperature=config.OUTLINE_TEMPERATURE,
            )
        except Exception as e:
            raise GenerationError(f"Outline generation failed: {e}") from e

        titles = parse_outline(outline_text)
        if not titles:
            titles = fallback_titles(form.get("pages", 10))
            logger.warning(f"Model returned no usable outline, using {len(titles)} generic sections")
        else:
            logger.info(f"Outline generated with {len(titles)} sections")

        return SectionList.from_titles(titles)
