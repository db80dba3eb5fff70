"""Tests for localized messages"""
from prompts.form_options import new_form, validate_form
from utils.messages import MESSAGES, get_message


def test_kurdish_message():
    assert get_message("title_required", "ckb") == MESSAGES["ckb"]["title_required"]


def test_falls_back_to_english_then_key():
    assert get_message("pages_invalid", "ckb") == MESSAGES["en"]["pages_invalid"]
    assert get_message("pages_invalid", "fr") == MESSAGES["en"]["pages_invalid"]
    assert get_message("no_such_key") == "no_such_key"


def test_formatting():
    assert get_message("save_failed", error="timeout").endswith("timeout")
    # Missing placeholder values leave the template intact
    assert get_message("generation_failed") == MESSAGES["en"]["generation_failed"]


def test_every_validation_error_has_a_message():
    form = new_form(title="", topic="", type="", level="", pages=0, temperature=3)
    for key in validate_form(form):
        assert key in MESSAGES["en"]
