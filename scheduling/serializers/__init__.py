import html

import bleach


def clean_text(v: str) -> str:
    """Strip every HTML tag and return plain text (``&`` stays ``&``)."""
    return html.unescape(bleach.clean((v or '').strip(), tags=set(), strip=True)).strip()
