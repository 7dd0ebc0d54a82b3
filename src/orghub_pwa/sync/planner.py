from typing import Iterable, List, Set

from orghub_pwa.config.branding import Branding, DEFAULT_BRANDING
from orghub_pwa.models.club import Club
from orghub_pwa.models.enums import ArtifactKind
from orghub_pwa.models.plan import PlannedDelete, PlannedWrite, SyncPlan
from orghub_pwa.rendering.index import render_index
from orghub_pwa.rendering.installer import render_installer
from orghub_pwa.rendering.manifest import render_manifest
from orghub_pwa.rendering.naming import (
    INDEX_FILENAME,
    installer_filename,
    is_managed_installer,
    is_managed_manifest,
    manifest_filename,
)


def find_orphans(
    clubs: List[Club],
    existing_manifests: Iterable[str],
    existing_installers: Iterable[str],
) -> List[PlannedDelete]:
    """Returns managed files that no club in the current list accounts for."""
    target_manifests: Set[str] = {manifest_filename(c.club_id) for c in clubs}
    target_installers: Set[str] = {installer_filename(c.club_id) for c in clubs}

    orphans = [
        PlannedDelete(kind=ArtifactKind.MANIFEST, filename=name)
        for name in sorted(set(existing_manifests))
        if is_managed_manifest(name) and name not in target_manifests
    ]
    orphans.extend(
        PlannedDelete(kind=ArtifactKind.INSTALLER, filename=name)
        for name in sorted(set(existing_installers))
        if is_managed_installer(name) and name not in target_installers
    )
    return orphans


def plan_sync(
    clubs: List[Club],
    existing_manifests: Iterable[str],
    existing_installers: Iterable[str],
    branding: Branding = DEFAULT_BRANDING,
) -> SyncPlan:
    """Computes deletes and rendered writes for a freshly fetched club list.

    Pure: reads nothing from storage. Writes are ordered manifest then
    installer per club, with the index last.
    """
    writes: List[PlannedWrite] = []
    for club in clubs:
        writes.append(
            PlannedWrite(
                kind=ArtifactKind.MANIFEST,
                filename=manifest_filename(club.club_id),
                content=render_manifest(club, branding),
            )
        )
        writes.append(
            PlannedWrite(
                kind=ArtifactKind.INSTALLER,
                filename=installer_filename(club.club_id),
                content=render_installer(club, branding),
            )
        )
    writes.append(
        PlannedWrite(
            kind=ArtifactKind.INDEX,
            filename=INDEX_FILENAME,
            content=render_index(clubs, branding),
        )
    )

    return SyncPlan(
        deletes=find_orphans(clubs, existing_manifests, existing_installers),
        writes=writes,
        club_count=len(clubs),
    )
