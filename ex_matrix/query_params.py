"""Query-string formatting for choice selections."""

from __future__ import annotations

from typing import Dict, Mapping, Optional
from urllib.parse import parse_qsl, quote, urlencode


def query_params_to_str(params: Mapping[str, Optional[str]], *, prefix: bool = True) -> str:
    """Serialize params in their mapping order, skipping unset and blank values."""
    pairs = [(key, value) for key, value in params.items() if value is not None and value != ""]
    if not pairs:
        return ""
    encoded = urlencode(pairs, quote_via=quote)
    return f"?{encoded}" if prefix else encoded


def str_to_query_params(text: str) -> Dict[str, str]:
    """Parse a query string (leading ``?`` optional). Later duplicates win."""
    text = text.strip()
    if text.startswith("?"):
        text = text[1:]
    return dict(parse_qsl(text, keep_blank_values=True))
