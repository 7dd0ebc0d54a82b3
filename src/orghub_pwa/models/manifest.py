from typing import List

from pydantic import BaseModel, ConfigDict


class ManifestIcon(BaseModel):
    """A single icon declaration inside a web app manifest."""

    model_config = ConfigDict(frozen=True)

    src: str
    sizes: str
    type: str = "image/png"
    purpose: str = "any maskable"


class WebManifest(BaseModel):
    """Installable PWA manifest for one club.

    Field declaration order is the serialization order, so it must stay
    stable for the write-if-changed comparison to hold between runs.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    short_name: str
    start_url: str
    scope: str
    display: str
    orientation: str
    background_color: str
    theme_color: str
    description: str
    icons: List[ManifestIcon]
    lang: str
    dir: str
