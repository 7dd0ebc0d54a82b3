from html import escape
from typing import List

from orghub_pwa.config.branding import Branding, DEFAULT_BRANDING
from orghub_pwa.models.club import Club

from .naming import installer_filename


def render_index(clubs: List[Club], branding: Branding = DEFAULT_BRANDING) -> str:
    """Renders the installer index, one link per club in input order."""
    product = escape(branding.product_name)
    items = [
        f'    <li><a href="{escape(branding.install_url_prefix)}/{installer_filename(c.club_id)}">'
        f"{escape(c.name)}</a></li>"
        for c in clubs
    ]
    item_block = "".join(f"{item}\n" for item in items)

    return f"""<!doctype html>
<html lang="{escape(branding.lang)}">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Instalacja klubów — {product}</title>
</head>
<body style="font-family:system-ui;padding:20px;">
  <h2>Instalacja klubów {product}</h2>
  <ul>
{item_block}  </ul>
</body>
</html>
"""
