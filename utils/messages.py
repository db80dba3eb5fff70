"""Localized user-facing messages (English and Central Kurdish)"""
import logging
from typing import Dict

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

LANGUAGES: Dict[str, str] = {
    "en": "English",
    "ckb": "کوردی (سۆرانی)",
}

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "title_required": "Please enter the title of the work first.",
        "topic_required": "Please choose a subject.",
        "type_required": "Please choose a writing type.",
        "level_required": "Please choose an academic level.",
        "pages_invalid": "The number of pages must be at least 1.",
        "temperature_invalid": "Temperature must be between 0 and 1.",
        "form_invalid": "Please fill in all required fields.",
        "api_key_missing": "Please enter an API key in the sidebar.",
        "api_key_invalid": "Please enter a valid OpenAI API key.",
        "azure_endpoint_missing": "Please enter the Azure endpoint.",
        "outline_failed": "An error occurred while building the outline.",
        "auto_select_failed": "An error occurred during automatic selection.",
        "auto_select_parse_failed": "The automatic selection returned an unreadable answer.",
        "generation_failed": "An error occurred while writing the section \"{section}\". Writing has stopped.",
        "rewrite_failed": "An error occurred while rewriting the section \"{section}\".",
        "nothing_to_rewrite": "This section has no text to rewrite yet.",
        "review_failed": "An error occurred during the academic review of the section \"{section}\".",
        "nothing_to_review": "This section has no text to review yet.",
        "rewrite_complete": "All written sections have been rewritten.",
        "generation_complete": "All sections have been written.",
        "save_success": "Saved to the library successfully!",
        "save_failed": "An error occurred while saving to the library: {error}",
        "store_not_configured": "The document library is not configured (SUPABASE_URL / SUPABASE_KEY).",
        "list_failed": "Could not load the library: {error}",
        "delete_failed": "Could not delete the document: {error}",
        "delete_success": "The document was deleted.",
        "load_failed": "The saved document could not be read.",
        "draft_restored": "Your previous draft was restored.",
        "unknown_error": "unknown",
    },
    "ckb": {
        "title_required": "تکایە سەرەتا ناونیشانی بابەتەکە بنووسە.",
        "form_invalid": "تکایە هەموو زانیارییە داواکراوەکان پڕبکەرەوە.",
        "api_key_missing": "تکایە کلیلی API بنووسە.",
        "outline_failed": "هەڵەیەک ڕوویدا لە داڕشتنی پێکهاتەکە.",
        "auto_select_failed": "هەڵەیەک ڕوویدا لە کاتی هەڵبژاردنی ئۆتۆماتیکی.",
        "generation_failed": "هەڵەیەک ڕوویدا لە کاتی نووسینی بەشی «{section}».",
        "review_failed": "هەڵە لە پێداچوونەوەی ئەکادیمیدا.",
        "rewrite_failed": "هەڵە لە هیومانیزکردنی بەشی «{section}».",
        "save_success": "بە سەرکەوتوویی لە بنکەی داتا پاشەکەوت کرا!",
        "save_failed": "هەڵەیەک ڕوویدا لە کاتی پاشەکەوتکردن لە بنکەی داتا: {error}",
        "delete_failed": "هەڵەیەک ڕوویدا لە کاتی سڕینەوە: {error}",
        "unknown_error": "نەزانراو",
    },
}


def get_message(key: str, lang: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """Look up a message, falling back to English, then to the key itself

    Args:
        key: Message key
        lang: Language code ("en" or "ckb")
        **kwargs: Values substituted into the message

    Returns:
        Formatted message text
    """
    template = MESSAGES.get(lang, {}).get(key) or MESSAGES[DEFAULT_LANGUAGE].get(key)
    if template is None:
        logger.debug(f"Missing message key: {key}")
        return key
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError):
        return template
