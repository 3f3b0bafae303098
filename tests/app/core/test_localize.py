from app.core.localize import PhraseTableTranslator, format_list_with_separators


def test_translator_falls_back_to_key():
    """Unknown phrase keys render as the key itself."""
    translator = PhraseTableTranslator({"a.b": "Hello"})
    assert translator.translate("a.b") == "Hello"
    assert translator.translate("missing.key") == "missing.key"


def test_default_phrases():
    """The default table carries the English phrases."""
    assert PhraseTableTranslator().translate("common.hidden") == "Hidden"


def test_format_list_with_separators():
    """Lists join with plain and final separators."""
    assert format_list_with_separators([], ", ", ", and ") == []
    assert format_list_with_separators(["a"], ", ", ", and ") == ["a"]
    assert format_list_with_separators(["a", "b"], ", ", ", and ", " and ") == ["a", " and ", "b"]
    assert format_list_with_separators(["a", "b"], ", ", " & ") == ["a", " & ", "b"]
    assert "".join(format_list_with_separators(["a", "b", "c"], ", ", ", and ")) == "a, b, and c"
