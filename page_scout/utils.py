# File: page_scout/utils.py
"""page_scout.utils: Утилиты для подготовки данных страниц перед сохранением."""

from __future__ import annotations

from typing import Dict, Mapping, Sequence

from page_scout.logger import logger

__all__: Sequence[str] = ("sanitize_text", "sanitize_document")


def sanitize_text(value: str) -> str:
    """Заменяет символы, не кодируемые в UTF-8 (одиночные суррогаты), на U+FFFD."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        logger.debug("Sanitized non UTF-8 text (%d chars)", len(value))
        return "".join("�" if 0xD800 <= ord(ch) <= 0xDFFF else ch for ch in value)
    return value


def sanitize_document(document: Mapping[str, str]) -> Dict[str, str]:
    """Применяет sanitize_text ко всем строковым полям документа."""
    return {k: sanitize_text(v) if isinstance(v, str) else v for k, v in document.items()}
