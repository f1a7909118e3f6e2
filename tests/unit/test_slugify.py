import pytest

from litarchive.domain.slugify import (
    is_valid_slug,
    normalize,
    transliterate_bengali,
    with_suffix,
)


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Hello World", "hello-world"),
        ("  Trim me  ", "trim-me"),
        ("snake_case_title", "snake-case-title"),
        ("What's new?", "whats-new"),
        ("Dash -- dash", "dash-dash"),
        ("---", ""),
        ("", ""),
        ("Chapter 12", "chapter-12"),
    ],
)
def test_normalize_latin(title, expected):
    assert normalize(title) == expected


def test_normalize_keeps_bengali():
    assert normalize("রবীন্দ্র সংগীত") == "রবীন্দ্র-সংগীত"


def test_normalize_mixed_script():
    assert normalize("Gitanjali গীতাঞ্জলি!") == "gitanjali-গীতাঞ্জলি"


def test_transliterate_inherent_vowel():
    assert transliterate_bengali("কবিতা") == "kobita"


def test_transliterate_keeps_latin_and_digits():
    assert transliterate_bengali("Poem ১২") == "poem-12"


def test_normalize_transliterate_flag():
    assert normalize("গান", transliterate=True) == "gano"


def test_is_valid_slug():
    assert is_valid_slug("hello-world")
    assert is_valid_slug("আমার-গান")
    assert not is_valid_slug("Hello")
    assert not is_valid_slug("-leading")
    assert not is_valid_slug("double--dash")
    assert not is_valid_slug("")


def test_with_suffix():
    assert with_suffix("rain", 1) == "rain"
    assert with_suffix("rain", 2) == "rain-2"
    assert with_suffix("rain", 10) == "rain-10"
