"""Unit tests for loading keyword dictionaries from YAML."""

import pytest

from directory_search.config import get_settings
from directory_search.infrastructure.keywords.yaml_keyword_loader import load_keyword_dictionaries


def test_bundled_dictionaries_keep_document_order():
    dictionaries = load_keyword_dictionaries(get_settings().keywords_file)

    assert dictionaries.industries[0] == ("ai", "AI・人工知能")
    assert ("東京", "東京都") in dictionaries.locations
    assert ("中小企業", "small") in dictionaries.company_sizes
    keywords = [keyword for keyword, _ in dictionaries.company_sizes]
    assert keywords.index("小企業") < keywords.index("中小企業")


def test_keywords_are_normalized(tmp_path):
    path = tmp_path / "keywords.yaml"
    path.write_text(
        "industries:\n"
        "  '  SaaS ': 'SaaS'\n"
        "  '': 'ignored'\n"
        "locations:\n"
        "  Tokyo: 東京都\n"
        "company_sizes: {}\n",
        encoding="utf-8",
    )

    dictionaries = load_keyword_dictionaries(path)

    assert dictionaries.industries == (("saas", "SaaS"),)
    assert dictionaries.locations == (("tokyo", "東京都"),)
    assert dictionaries.company_sizes == ()


def test_missing_section_is_rejected(tmp_path):
    path = tmp_path / "keywords.yaml"
    path.write_text("industries: {}\nlocations: {}\n", encoding="utf-8")

    with pytest.raises(ValueError, match="company_sizes"):
        load_keyword_dictionaries(path)


def test_non_mapping_document_is_rejected(tmp_path):
    path = tmp_path / "keywords.yaml"
    path.write_text("- ai\n- web\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_keyword_dictionaries(path)


def test_non_string_values_are_rejected(tmp_path):
    path = tmp_path / "keywords.yaml"
    path.write_text("industries:\n  ai: [1, 2]\nlocations: {}\ncompany_sizes: {}\n", encoding="utf-8")

    with pytest.raises(ValueError, match="non-string"):
        load_keyword_dictionaries(path)
