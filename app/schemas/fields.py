# app/schemas/fields.py
# Normalizadores compartilhados pelos schemas de entrada
from typing import Iterable, List, Optional
from urllib.parse import urlparse

# limites das colunas String(200) / String(500)
TITLE_MAX_LENGTH = 200
URL_MAX_LENGTH = 500

def clean_required(value, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"{field} is required.")
    return str(value).strip()

def clean_optional(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None

def normalize_url(value) -> Optional[str]:
    """URL livre (não armazenamos arquivos); vazio vira None, esquema precisa ser http(s)."""
    text = clean_optional(value)
    if text is None:
        return None
    parsed = urlparse(text)
    if parsed.scheme not in ("http", "https") or not parsed.netloc or " " in text:
        raise ValueError("Malformed URL (expected http:// or https://).")
    return text

def unique_in_order(items: Iterable[str]) -> List[str]:
    out: List[str] = []
    for item in items or []:
        text = str(item).strip()
        if text and text not in out:
            out.append(text)
    return out
