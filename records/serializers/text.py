import html

import bleach


def clean_text(v):
    """Strip markup from free text, leaving ``&`` and ``<`` as typed."""
    return html.unescape(bleach.clean((v or '').strip(), tags=set(), strip=True)).strip()
