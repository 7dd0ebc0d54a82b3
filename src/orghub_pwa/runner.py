import sys
import asyncio
from typing import Optional

from loguru import logger
from rich import print
from rich.panel import Panel

from orghub_pwa.config.branding import Branding, DEFAULT_BRANDING
from orghub_pwa.config.settings import (
    AppSettings,
    ConfigurationError,
    require_source_url,
    settings as default_settings,
)
from orghub_pwa.fetch.club_list_client import ClubListClient, SourceError
from orghub_pwa.logging.setup import setup_logging
from orghub_pwa.models.plan import SyncReport
from orghub_pwa.normalization.normalizer import ClubNormalizer
from orghub_pwa.storage.filesystem import (
    ArtifactStorage,
    LocalArtifactStorage,
    StorageError,
)
from orghub_pwa.sync.executor import SyncError, sync_clubs


async def run_sync(
    settings: AppSettings = default_settings,
    client: Optional[ClubListClient] = None,
    storage: Optional[ArtifactStorage] = None,
    branding: Branding = DEFAULT_BRANDING,
) -> SyncReport:
    """Fetches the club list and reconciles the generated artifacts with it.

    Storage is only touched after the list has been fetched and validated,
    so a bad response never deletes anything.
    """
    url = require_source_url(settings)

    client = client or ClubListClient(
        url,
        timeout=settings.request_timeout,
        max_attempts=settings.fetch_max_attempts,
    )
    async with client:
        raw_clubs = await client.fetch_clubs()

    clubs = ClubNormalizer(branding).normalize(raw_clubs)

    storage = storage or LocalArtifactStorage(settings.output_root)
    return sync_clubs(clubs, storage, branding, dry_run=settings.dry_run)


def print_summary(report: SyncReport) -> None:
    title = "Dry run" if report.dry_run else "Club PWA sync"
    print(
        Panel(
            f"Clubs: [bold]{report.club_count}[/bold]\n"
            f"Written: [green]{len(report.written)}[/green]  "
            f"Unchanged: {len(report.unchanged)}  "
            f"Deleted: [yellow]{len(report.deleted)}[/yellow]",
            title=title,
        )
    )


def main(settings: AppSettings = default_settings) -> int:
    """Runs one sync and returns the process exit code."""
    setup_logging(settings)

    try:
        report = asyncio.run(run_sync(settings))
    except ConfigurationError as e:
        logger.critical(str(e))
        return 1
    except SourceError as e:
        logger.error(f"Club list unavailable, nothing changed: {e}")
        return 1
    except SyncError as e:
        logger.error(f"Sync finished with errors: {e}")
        print_summary(e.report)
        return 1
    except StorageError as e:
        logger.error(f"Storage error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Execution interrupted by user (KeyboardInterrupt).")
        return 1
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        return 1

    print_summary(report)
    logger.success(f"Generated: {report.club_count} clubs")
    return 0


if __name__ == "__main__":
    sys.exit(main())
