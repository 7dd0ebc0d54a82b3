import json

from orghub_pwa.config.branding import Branding, DEFAULT_BRANDING
from orghub_pwa.models.club import Club
from orghub_pwa.models.manifest import WebManifest


def build_manifest(club: Club, branding: Branding = DEFAULT_BRANDING) -> WebManifest:
    """Builds the PWA manifest that pins the installed app to one club."""
    return WebManifest(
        id=f"{branding.app_id_prefix}-{club.club_id}",
        name=f"{branding.product_name} – {club.name}",
        short_name=club.short_name,
        start_url=f"/#clubId={club.club_id}",
        scope=branding.scope,
        display=branding.display,
        orientation=branding.orientation,
        background_color=club.background_color,
        theme_color=club.theme_color,
        description=f"Panel klubu {club.name} w systemie {branding.product_name}.",
        icons=list(branding.icons),
        lang=branding.lang,
        dir=branding.dir,
    )


def render_manifest(club: Club, branding: Branding = DEFAULT_BRANDING) -> str:
    """Serializes the club manifest as indented JSON with a trailing newline."""
    manifest = build_manifest(club, branding)
    return json.dumps(manifest.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"
