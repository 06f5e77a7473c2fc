import json
import re
import unicodedata
from typing import List

from core.errors import ClientInputError, INVALID_PARAMS

# novi red (CRLF ili LF), zarez, tačka-zarez, uspravna crta
TERM_DELIMITERS = re.compile(r"\r?\n|[,;|]")


def normalize_text(text: str) -> str:
    """Priprema teksta za poređenje bez obzira na velika/mala slova.

    Srpska pravila za mala slova se ne razlikuju od podrazumevanog
    Unicode mapiranja, pa je dovoljan ``str.lower`` nad NFC oblikom.
    """
    if not text:
        return ""
    text = unicodedata.normalize("NFC", text)
    return text.lower().strip()


def parse_terms(raw: str) -> List[str]:
    """Deli sirov unos na pojmove. Duplikati ostaju, prazni delovi se izbacuju."""
    if not raw:
        return []
    terms = []
    for fragment in TERM_DELIMITERS.split(raw):
        fragment = fragment.strip()
        if fragment:
            terms.append(normalize_text(fragment))
    return terms


def parse_json_terms(raw: str) -> List[str]:
    """Čita JSON niz stringova iz polja forme (requiredTerms/optionalTerms)."""
    if raw is None or not raw.strip():
        return []
    try:
        values = json.loads(raw)
    except ValueError as exc:
        raise ClientInputError(INVALID_PARAMS) from exc
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ClientInputError(INVALID_PARAMS)
    terms = [normalize_text(v) for v in values]
    return [term for term in terms if term]


def make_snippet(text: str, length: int = 200) -> str:
    if len(text) > length:
        return text[:length] + "..."
    return text
