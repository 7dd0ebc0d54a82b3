from html import escape

from orghub_pwa.config.branding import Branding, DEFAULT_BRANDING
from orghub_pwa.models.club import Club

from .naming import installer_filename, manifest_filename


def render_installer(club: Club, branding: Branding = DEFAULT_BRANDING) -> str:
    """Renders the standalone install page for one club.

    Every value that came from the remote list is HTML-escaped, colors
    included.
    """
    name = escape(club.name)
    short_name = escape(club.short_name)
    manifest_href = f"{branding.manifests_url_prefix}/{manifest_filename(club.club_id)}"
    deep_link = f"{branding.public_app_url}/#clubId={club.club_id}"

    return f"""<!doctype html>
<html lang="{escape(branding.lang)}">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Instaluj: {short_name}</title>
  <link rel="manifest" href="{escape(manifest_href)}">
  <meta name="theme-color" content="{escape(club.theme_color)}">
</head>
<body style="font-family:system-ui;padding:20px;background:{escape(club.background_color)};color:#fff;">
  <h2>{escape(branding.product_name)} – {name}</h2>
  <p>Chrome: menu ⋮ → <b>Zainstaluj aplikację</b> (lub „Dodaj do ekranu głównego”).</p>
  <p>Po instalacji ta ikona zawsze otworzy klub <b>{short_name}</b>.</p>
  <hr style="opacity:.25">
  <p style="opacity:.85">Link do uruchomienia bez instalacji:<br>
    <code>{escape(deep_link)}</code>
  </p>
</body>
</html>
"""
