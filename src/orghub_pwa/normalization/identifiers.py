# src/orghub_pwa/normalization/identifiers.py
import re
from typing import Any

_DISALLOWED = re.compile(r"[^a-z0-9_-]")
_HYPHEN_RUNS = re.compile(r"-+")


def safe_id(raw: Any) -> str:
    """Converts an arbitrary identifier into a file- and URL-safe form.

    Never fails. An empty result means the input carried no usable
    identifier and the caller must drop the record.
    """
    text = "" if raw is None else str(raw)
    text = text.strip().lower()
    text = _DISALLOWED.sub("-", text)
    text = _HYPHEN_RUNS.sub("-", text)
    return text.strip("-")
