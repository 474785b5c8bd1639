"""Loads the entity-extraction keyword dictionaries from YAML.

Executed once per process; the resulting ``KeywordDictionaries`` is
immutable and injected into the ``EntityExtractor``.
"""

import logging
from functools import lru_cache
from pathlib import Path

import yaml

from directory_search.config import get_settings
from directory_search.domain.entities import KeywordDictionaries, KeywordTable

logger = logging.getLogger(__name__)

_SECTIONS = ("industries", "locations", "company_sizes")


def load_keyword_dictionaries(path: str | Path) -> KeywordDictionaries:
    """Parse a keyword YAML file, keeping document order.

    Raises ``ValueError`` when the file is missing a section or a section
    is not a mapping of strings.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Keyword file {path} must contain a mapping at the top level")

    tables: dict[str, KeywordTable] = {}
    for section in _SECTIONS:
        tables[section] = _parse_section(path, section, data.get(section))

    logger.info(
        "Loaded keyword dictionaries from %s: industries=%d locations=%d company_sizes=%d",
        path.name,
        len(tables["industries"]),
        len(tables["locations"]),
        len(tables["company_sizes"]),
    )
    return KeywordDictionaries(**tables)


def _parse_section(path: Path, section: str, raw: object) -> KeywordTable:
    if not isinstance(raw, dict):
        raise ValueError(f"Keyword file {path}: section '{section}' must be a mapping")

    entries: list[tuple[str, str]] = []
    for keyword, canonical in raw.items():
        if not isinstance(keyword, str) or not isinstance(canonical, str):
            raise ValueError(
                f"Keyword file {path}: section '{section}' has a non-string entry {keyword!r}: {canonical!r}"
            )
        keyword = keyword.strip().lower()
        if not keyword:
            continue
        entries.append((keyword, canonical.strip()))
    return tuple(entries)


@lru_cache
def get_keyword_dictionaries() -> KeywordDictionaries:
    """Process-wide dictionaries from the configured keywords file."""
    return load_keyword_dictionaries(get_settings().keywords_file)
