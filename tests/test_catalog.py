import random

import pytest

from app.errors import TextNotFound
from services.catalog import DEFAULT_TEXTS, PracticeText, TextCatalog


@pytest.fixture
def catalog():
    return TextCatalog([
        PracticeText("a", "Alpha", "the first text", "Stories", "easy", "en"),
        PracticeText("b", "Beta", "second TEXT here", "Quotes", "medium", "en"),
        PracticeText("c", "Gamma", "xin chào", "Stories", "hard", "vi"),
    ])


def test_word_and_char_count():
    t = PracticeText("x", "X", "  two   words ", "c")
    assert t.word_count == 2
    assert t.char_count == 14


def test_get(catalog):
    assert catalog.get("b").title == "Beta"
    with pytest.raises(TextNotFound):
        catalog.get("nope")


def test_get_not_found_is_a_key_error(catalog):
    with pytest.raises(KeyError):
        catalog.get("nope")


def test_categories_and_languages_keep_order(catalog):
    assert catalog.categories() == ["Stories", "Quotes"]
    assert catalog.languages() == ["en", "vi"]


def test_filter_defaults_return_everything(catalog):
    assert [t.id for t in catalog.filter()] == ["a", "b", "c"]


def test_filter_search_is_case_insensitive(catalog):
    assert [t.id for t in catalog.filter(search="text")] == ["a", "b"]
    assert [t.id for t in catalog.filter(search="GAMMA")] == ["c"]


def test_filter_combined(catalog):
    assert [t.id for t in catalog.filter(category="Stories", language="en")] == ["a"]
    assert [t.id for t in catalog.filter(difficulty="medium")] == ["b"]
    assert catalog.filter(category="Stories", difficulty="medium") == []


def test_by_helpers(catalog):
    assert [t.id for t in catalog.by_category("Stories")] == ["a", "c"]
    assert [t.id for t in catalog.by_difficulty("hard")] == ["c"]
    assert [t.id for t in catalog.by_language("vi")] == ["c"]


def test_random(catalog):
    rng = random.Random(3)
    assert catalog.random(rng) in catalog.all()
    assert TextCatalog(()).random() is None


def test_catalog_is_read_only(catalog):
    texts = catalog.all()
    texts.clear()
    assert len(catalog) == 3


def test_from_records_prefers_slug():
    cat = TextCatalog.from_records([
        {"id": 7, "slug": "seven", "title": "T", "text": "x", "category": "c",
         "difficulty": "hard", "language": "fr"},
        {"id": 8, "slug": None, "title": "U", "text": "y", "category": "c"},
    ])
    assert cat.get("seven").difficulty == "hard"
    assert cat.get("8").language == "en"


def test_defaults_are_valid():
    assert len(DEFAULT_TEXTS) >= 3
    assert len({t.id for t in DEFAULT_TEXTS}) == len(DEFAULT_TEXTS)
    for t in DEFAULT_TEXTS:
        assert t.difficulty in ("easy", "medium", "hard")
        assert t.text == t.text.strip()
