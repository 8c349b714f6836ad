"""
Configuration directory resolution.
The tags database lives in the tool's config directory; override it with
BACKUP_TAGS_CONFIG_DIR (e.g. in .env) for tests or portable installs.
"""
import os
from pathlib import Path

APP_DIR_NAME = "pz-backup-tool"
CONFIG_DIR_ENV = "BACKUP_TAGS_CONFIG_DIR"


def get_config_dir() -> Path:
    """Return the config directory. Raises OSError if no home/appdata can be determined."""
    override = os.getenv(CONFIG_DIR_ENV)
    if override and override.strip():
        return Path(override.strip()).expanduser()

    if os.name == "nt":
        appdata = os.getenv("APPDATA")
        if not appdata:
            raise OSError("APPDATA is not set; cannot determine config directory")
        return Path(appdata) / APP_DIR_NAME

    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg and xdg.strip():
        return Path(xdg.strip()) / APP_DIR_NAME
    try:
        home = Path.home()
    except RuntimeError as e:
        raise OSError(f"Cannot determine home directory: {e}") from e
    return home / ".config" / APP_DIR_NAME
