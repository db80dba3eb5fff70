"""Sequential, streamed section generation"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

import config
from core.errors import GenerationError
from core.llm_client import LLMClient
from core.models import Section, SectionList, SectionStatus
from prompts.peer_review import get_peer_review_prompt
from prompts.rewriting import get_rewrite_prompt
from prompts.section_writing import build_previous_context, get_section_writing_prompt

logger = logging.getLogger(__name__)

SectionCallback = Callable[[Section], None]


@dataclass
class GenerationReport:
    """Outcome of an auto-write or auto-rewrite run"""

    completed: List[int] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)
    failed_id: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failed_id is None


class GenerationDriver:
    """Drive the LLM section by section, streaming text into each Section

    Only one call is ever in flight: sections are written strictly in list
    order and each stream is consumed to the end before the next starts.

    Args:
        llm_client: Client used for streaming generation
        on_delta: Called with the section after every streamed chunk
        on_status: Called with the section after every status change
        previous_context_chars: Size of the continuity context tail
    """

    def __init__(
        self,
        llm_client: LLMClient,
        on_delta: Optional[SectionCallback] = None,
        on_status: Optional[SectionCallback] = None,
        previous_context_chars: int = None,
    ):
        self.llm_client = llm_client
        self.on_delta = on_delta
        self.on_status = on_status
        self.previous_context_chars = (
            previous_context_chars
            if previous_context_chars is not None
            else config.PREVIOUS_CONTEXT_CHARS
        )

    def _set_status(self, section: Section, status: SectionStatus):
        section.status = status
        if self.on_status:
            self.on_status(section)

    def _stream_into(
        self,
        section: Section,
        system_prompt: str,
        user_prompt: str,
        form: Dict,
        temperature: Optional[float] = None,
    ):
        if temperature is None:
            temperature = float(form.get("temperature", 0.7))
        for delta in self.llm_client.generate_streaming(
            prompt=user_prompt,
            system_prompt=system_prompt,
            temperature=temperature,
            max_tokens=int(form.get("writingTokens") or config.DEFAULT_WRITING_TOKENS),
            thinking_tokens=int(form.get("thinkingTokens") or 0),
        ):
            section.append(delta)
            if self.on_delta:
                self.on_delta(section)

    def generate_section(
        self,
        section: Section,
        form: Dict,
        previous_context: str = "",
        section_index: int = 0,
        section_count: int = 1,
    ) -> Section:
        """Write one section from scratch

        On failure the section's previous content is restored, its status
        reverts to pending and GenerationError is raised.
        """
        previous_content = section.content
        system_prompt, user_prompt = get_section_writing_prompt(
            form, section.title, previous_context, section_index, section_count
        )

        logger.info(f"Generating section {section.id}: {section.title[:60]}")
        section.content = ""
        self._set_status(section, SectionStatus.GENERATING)

        try:
            self._stream_into(section, system_prompt, user_prompt, form)
            if not section.content.strip():
                raise ValueError("model returned no text")
        except Exception as e:
            logger.error(f"Generation failed for section {section.id}: {e}", exc_info=True)
            section.content = previous_content
            self._set_status(section, SectionStatus.PENDING)
            raise GenerationError(f"Generation failed for '{section.title}': {e}", section.id) from e

        self._set_status(section, SectionStatus.DONE)
        logger.info(f"Section {section.id} done ({section.word_count} words)")
        return section

    def auto_write(self, sections: SectionList, form: Dict, skip_done: bool = True) -> GenerationReport:
        """Write every section in order, halting at the first failure

        Sections already marked done are kept (and used as context) when
        skip_done is set, so an interrupted run can be resumed. Sections
        after a failure are left untouched.

        Args:
            sections: Document sections, mutated in place
            form: Writing form values
            skip_done: Keep sections that are already complete

        Returns:
            GenerationReport describing what was written
        """
        report = GenerationReport()
        written: List[str] = []
        total = len(sections)

        for index, section in enumerate(list(sections)):
            if skip_done and section.status == SectionStatus.DONE:
                report.skipped.append(section.id)
                written.append(section.content)
                continue

            context = build_previous_context(written, self.previous_context_chars)
            try:
                self.generate_section(section, form, context, index, total)
            except GenerationError as e:
                report.failed_id = section.id
                report.error = str(e)
                logger.warning(f"Auto-write halted at section {section.id}")
                break

            report.completed.append(section.id)
            written.append(section.content)

        logger.info(
            f"Auto-write finished: {len(report.completed)} written, "
            f"{len(report.skipped)} skipped, failed={report.failed_id}"
        )
        return report

    def _replace_content(
        self,
        section: Section,
        form: Dict,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        action: str,
    ) -> Section:
        """Stream a new version of an existing section's text

        The content is replaced only when the stream completes; on failure
        the original content and status are restored.
        """
        previous_content = section.content
        previous_status = section.status

        logger.info(f"{action} section {section.id}")
        section.content = ""
        self._set_status(section, SectionStatus.REWRITING)

        try:
            self._stream_into(section, system_prompt, user_prompt, form, temperature)
            if not section.content.strip():
                raise ValueError("model returned no text")
        except Exception as e:
            logger.error(f"{action} failed for section {section.id}: {e}", exc_info=True)
            section.content = previous_content
            self._set_status(section, previous_status)
            raise GenerationError(f"{action} failed for '{section.title}': {e}", section.id) from e

        self._set_status(section, SectionStatus.DONE)
        return section

    def rewrite_section(self, section: Section, form: Dict, instruction: str = "") -> Section:
        """Rewrite an existing section's text so it reads naturally"""
        if not section.content.strip():
            raise ValueError(f"Section {section.id} has no content to rewrite")

        system_prompt, user_prompt = get_rewrite_prompt(
            form, section.title, section.content, instruction
        )
        return self._replace_content(
            section, form, system_prompt, user_prompt, config.REWRITE_TEMPERATURE, "Rewrite"
        )

    def review_section(self, section: Section, form: Dict) -> Section:
        """Run an academic peer review over a section and keep the corrected text"""
        if not section.content.strip():
            raise ValueError(f"Section {section.id} has no content to review")

        system_prompt, user_prompt = get_peer_review_prompt(form, section.title, section.content)
        return self._replace_content(
            section, form, system_prompt, user_prompt, config.REVIEW_TEMPERATURE, "Review"
        )

    def auto_rewrite(self, sections: SectionList, form: Dict) -> GenerationReport:
        """Rewrite every section that has text, in order, halting at the first failure

        Sections without text are skipped. Sections after a failure are left
        untouched.
        """
        report = GenerationReport()

        for section in list(sections):
            if not section.content.strip():
                report.skipped.append(section.id)
                continue
            try:
                self.rewrite_section(section, form)
            except GenerationError as e:
                report.failed_id = section.id
                report.error = str(e)
                logger.warning(f"Auto-rewrite halted at section {section.id}")
                break
            report.completed.append(section.id)

        logger.info(
            f"Auto-rewrite finished: {len(report.completed)} rewritten, "
            f"{len(report.skipped)} skipped, failed={report.failed_id}"
        )
        return report
