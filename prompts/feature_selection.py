"""Prompt templates for automatic feature selection"""

from typing import List


def get_feature_selection_prompt(
    title: str,
    writing_type: str,
    level: str,
    group_keys: List[str],
) -> tuple[str, str]:
    """Get prompts asking the model to pick the relevant features of one group

    Args:
        title: Work title
        writing_type: Work type (essay, thesis, book, ...)
        level: Academic level
        group_keys: Feature keys the model may choose from

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    system_prompt = "You are an expert academic advisor at Harvard University."

    user_prompt = f"""I am writing a {level} level {writing_type} titled "{title}".

I have a group of advanced academic features: {", ".join(group_keys)}.

Based on the title, type and level, select the MOST RELEVANT features from this list that would genuinely improve the quality of this specific work.
Respond ONLY with JSON of the form {{"selected": ["feature1", "feature2"]}} using the exact keys above, no markdown."""

    return system_prompt, user_prompt
