import pytest

from grading import languages
from grading.exceptions import UnsupportedLanguage


def test_cpp_alias_and_submission_vocabulary_resolve_to_same_engine_id():
    assert languages.resolve("cpp") == languages.resolve("c++") == 54


def test_normalize_only_rewrites_cpp():
    assert languages.normalize_language("cpp") == "c++"
    assert languages.normalize_language("c++") == "c++"
    assert languages.normalize_language("java") == "java"
    assert languages.normalize_language("javascript") == "javascript"


@pytest.mark.parametrize("name", ["python", "CPP", "Java", "js", ""])
def test_unknown_or_differently_cased_names_are_rejected(name):
    assert not languages.is_supported(name)
    with pytest.raises(UnsupportedLanguage) as exc:
        languages.resolve(name)
    assert exc.value.language == name
    assert str(exc.value).startswith("unsupported_language")
