"""Automatic selection of the feature flags relevant to a work"""
import logging
from typing import Dict, List

from core.errors import ContentParseError, FormValidationError, GenerationError
from core.llm_client import LLMClient
from prompts.feature_selection import get_feature_selection_prompt
from prompts.form_options import FEATURE_GROUPS
from utils.json_repair import parse_json_response

logger = logging.getLogger(__name__)


class FeatureSelector:
    """Ask the model which features of a group fit the current title"""

    def __init__(self, llm_client: LLMClient):
        self.llm_client = llm_client

    def select(self, form: Dict, group_name: str) -> Dict:
        """Return a copy of the form with the group's flags chosen by the model

        Every key of the group is reset to False first; only returned keys
        that belong to the group are then set to True.

        Args:
            form: Writing form values
            group_name: Key of FEATURE_GROUPS

        Returns:
            Updated form dictionary
        """
        title = str(form.get("title") or "").strip()
        if not title:
            raise FormValidationError("title_required")
        if group_name not in FEATURE_GROUPS:
            raise ValueError(f"Unknown feature group: {group_name}")

        group_keys = FEATURE_GROUPS[group_name]
        system_prompt, user_prompt = get_feature_selection_prompt(
            title, form.get("type", ""), form.get("level", ""), group_keys
        )

        logger.info(f"Auto-selecting features for group '{group_name}'")
        try:
            response = self.llm_client.generate(
                prompt=user_prompt,
                system_prompt=system_prompt,
                temperature=0.2,
                response_format="json",
            )
        except Exception as e:
            raise GenerationError(f"Feature selection failed: {e}") from e

        selected = self._extract_keys(parse_json_response(response))

        updated = dict(form)
        for key in group_keys:
            updated[key] = False
        chosen = [key for key in selected if key in group_keys]
        for key in chosen:
            updated[key] = True

        ignored = sorted(set(selected) - set(group_keys))
        if ignored:
            logger.debug(f"Ignoring unknown feature keys: {ignored}")
        logger.info(f"Selected {len(chosen)}/{len(group_keys)} features in '{group_name}'")
        return updated

    @staticmethod
    def _extract_keys(data) -> List[str]:
        """Accept either a bare array or an object wrapping one"""
        if isinstance(data, dict):
            data = data.get("selected", next(
                (v for v in data.values() if isinstance(v, list)), None
            ))
        if not isinstance(data, list):
            raise ContentParseError("Feature selection response is not a list")
        return [str(item) for item in data if isinstance(item, str)]
