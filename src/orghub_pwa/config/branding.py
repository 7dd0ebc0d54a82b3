from typing import Tuple

from pydantic import BaseModel, ConfigDict

from orghub_pwa.models.manifest import ManifestIcon

DEFAULT_THEME_COLOR = "#F47B20"
DEFAULT_BACKGROUND_COLOR = "#0B1E3F"

DEFAULT_ICONS: Tuple[ManifestIcon, ...] = (
    ManifestIcon(src="/icon-192.png", sizes="192x192"),
    ManifestIcon(src="/icon-512.png", sizes="512x512"),
)


class Branding(BaseModel):
    """Fixed product values baked into every generated artifact.

    Passed explicitly to the normalizer and renderers so tests can swap any
    of them without patching module globals.
    """

    model_config = ConfigDict(frozen=True)

    app_id_prefix: str = "orghub"
    product_name: str = "OrgHub"
    default_theme_color: str = DEFAULT_THEME_COLOR
    default_background_color: str = DEFAULT_BACKGROUND_COLOR
    icons: Tuple[ManifestIcon, ...] = DEFAULT_ICONS
    lang: str = "pl"
    dir: str = "ltr"
    scope: str = "/"
    display: str = "standalone"
    orientation: str = "portrait"
    public_app_url: str = "https://orghub-systems.github.io"
    manifests_url_prefix: str = "/manifests"
    install_url_prefix: str = "/install"


DEFAULT_BRANDING = Branding()
