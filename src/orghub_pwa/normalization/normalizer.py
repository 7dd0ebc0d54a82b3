import json
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger

from orghub_pwa.config.branding import Branding, DEFAULT_BRANDING
from orghub_pwa.models.club import Club

from .identifiers import safe_id


def coerce_text(value: Any) -> Optional[str]:
    """Turns a loosely typed JSON value into trimmed text.

    Returns None for null, empty and whitespace-only values so callers can
    fall through to the next candidate.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    elif isinstance(value, (dict, list)):
        text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    else:
        text = str(value)
    # Lone surrogates are valid JSON escapes but cannot be written as UTF-8
    text = text.encode("utf-8", "replace").decode("utf-8").strip()
    return text or None


def _first_text(*candidates: Any) -> Optional[str]:
    for candidate in candidates:
        if (text := coerce_text(candidate)) is not None:
            return text
    return None


class ClubNormalizer:
    """Projects raw club records from the remote list into Club objects."""

    def __init__(self, branding: Branding = DEFAULT_BRANDING):
        self.branding = branding

    def project(self, raw: Any) -> Optional[Club]:
        """Maps one raw record to a Club, or None when it has no usable id."""
        if not isinstance(raw, dict):
            logger.debug(f"Skipping non-object club record: {raw!r}")
            return None

        club_id = safe_id(coerce_text(raw.get("clubId")))
        if not club_id:
            logger.debug(f"Skipping club record without a usable clubId: {raw!r}")
            return None

        name = _first_text(raw.get("name")) or club_id
        short_name = _first_text(raw.get("shortName"), name) or club_id

        return Club(
            club_id=club_id,
            name=name,
            short_name=short_name,
            theme_color=_first_text(raw.get("themeColor"))
            or self.branding.default_theme_color,
            background_color=_first_text(raw.get("backgroundColor"))
            or self.branding.default_background_color,
        )

    def normalize(self, raw_clubs: Iterable[Any]) -> List[Club]:
        """Normalizes a raw club list.

        Records without a usable id are dropped. When two records share a
        normalized id the later one wins but keeps the earlier position.
        """
        clubs_by_id: Dict[str, Club] = {}
        dropped = 0

        for raw in raw_clubs:
            club = self.project(raw)
            if club is None:
                dropped += 1
                continue
            if club.club_id in clubs_by_id:
                logger.warning(
                    f"Duplicate clubId '{club.club_id}' in source list, later record wins."
                )
            clubs_by_id[club.club_id] = club

        if dropped:
            logger.info(f"Dropped {dropped} club record(s) without a usable clubId.")
        logger.info(f"Normalization complete. Produced {len(clubs_by_id)} clubs.")
        return list(clubs_by_id.values())
