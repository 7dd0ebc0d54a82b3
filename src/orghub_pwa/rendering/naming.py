import re

MANIFESTS_DIR_NAME = "manifests"
INSTALL_DIR_NAME = "install"
INDEX_FILENAME = "index.html"

# Anything in the output directories matching these is treated as ours.
MANIFEST_FILENAME_PATTERN = re.compile(r"^manifest-[a-z0-9_-]+\.json$", re.IGNORECASE)
INSTALLER_FILENAME_PATTERN = re.compile(r"^[a-z0-9_-]+\.html$", re.IGNORECASE)


def manifest_filename(club_id: str) -> str:
    return f"manifest-{club_id}.json"


def installer_filename(club_id: str) -> str:
    return f"{club_id}.html"


def is_managed_manifest(filename: str) -> bool:
    return bool(MANIFEST_FILENAME_PATTERN.match(filename))


def is_managed_installer(filename: str) -> bool:
    """True for generated installer pages; the index page is never one."""
    return filename.lower() != INDEX_FILENAME and bool(
        INSTALLER_FILENAME_PATTERN.match(filename)
    )
