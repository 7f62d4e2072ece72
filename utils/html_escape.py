"""
Escaping for Telegram HTML parse mode.

Staff notifications are HTML; anything the customer typed (name, address,
notes, customization notes, product names from the catalog) goes through
safe_html() before it is embedded. Localized templates are trusted and are
never escaped.
"""

import html
from typing import Optional


def safe_html(text: Optional[str]) -> str:
    """
    Escape <, >, & and quotes; None becomes an empty string.

    Examples:
        >>> safe_html("Ana <b>López</b>")
        'Ana &lt;b&gt;López&lt;/b&gt;'
        >>> safe_html(None)
        ''
    """
    if text is None:
        return ""
    return html.escape(str(text), quote=True)
