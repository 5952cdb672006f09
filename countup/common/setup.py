import os
import sys
from pathlib import Path
from dataclasses import dataclass

# Identity triple the host uses to key per-user data (window prefs, logs).
APP_IDENTITY = ("app", "emmabritton", "countup")

# Lil helper function to create a directory (and its parents) if it's missing.
def ensure_directory(path: Path):
    path.mkdir(parents=True,exist_ok=True)
    return path

# Picks the per-user base folder for the current platform. COUNTUP_DATA_DIR wins over everything, and is used as
# the data folder directly.
def user_data_root():
    override = os.getenv("COUNTUP_DATA_DIR")
    if override:
        return Path(override), True
    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if not appdata:
            raise RuntimeError("Missing APPDATA environment variable, cannot determine data directories.")
        return Path(appdata), False
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg), False
    return Path.home() / ".local" / "share", False

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path
    prefs: Path

    @staticmethod
    def build(identity=APP_IDENTITY):
        # Folder for all user-specific stuff, keyed by vendor/author/app
        base, is_override = user_data_root()
        if is_override:
            data = ensure_directory(base)
        else:
            vendor, author, app_name = identity
            data = ensure_directory(base / vendor / author / app_name)

        logs = ensure_directory(data / "logs")
        prefs = data / "prefs.json"

        return ProjectPaths(
            data = data,
            logs = logs,
            prefs = prefs,
        )
PATHS = ProjectPaths.build()
