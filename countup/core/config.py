import json
from countup.common.logger import log
from countup.common.setup import PATHS, APP_IDENTITY
from countup.util.misc import now_iso


_SCHEMA_VERSION = 1

#region === Helpers and Paths ===

PREFS_PATH = PATHS.prefs

# Default values just for the window section of the prefs dict. None means "let the window manager decide".
_WINDOW_DEFAULTS = {
    "x": None,
    "y": None,
    "width": 270,
    "height": 90,
}
# Helper to return a truly fresh, default prefs dict.
def build_default_prefs():
    vendor, author, app_name = APP_IDENTITY
    return {
        "meta": {
            "schema_version": _SCHEMA_VERSION,
            "saved_at": now_iso(),
            "identity": [vendor, author, app_name],
        },
        "window": dict(_WINDOW_DEFAULTS),
    }

def _valid_coord(value, allow_none):
    if value is None:
        return allow_none
    return isinstance(value, int) and not isinstance(value, bool)

#endregion === Helpers and Paths ===

#region === Saving and Loading Prefs ===

# Loads window prefs from PATHS.prefs, ensuring the schema is valid and handling default fallbacks.
def load_prefs():
    try:
        if not PREFS_PATH.exists():
            log.info("No existing prefs.json found, loading fresh prefs dict.")
            return build_default_prefs()

        with open(PREFS_PATH, "r", encoding="utf-8") as f:
            prefs = json.load(f)
        if not isinstance(prefs, dict):
            raise TypeError(f"prefs.json holds a {type(prefs).__name__}, expected an object")
        defaulted_values = set()

        # Validate the meta dict
        if "meta" not in prefs or not isinstance(prefs["meta"], dict):
            defaulted_values.add("meta")
            prefs["meta"] = {}
        if "schema_version" not in prefs["meta"] or not isinstance(prefs["meta"]["schema_version"], int):
            defaulted_values.add("meta.schema_version")
            prefs["meta"]["schema_version"] = _SCHEMA_VERSION

        # Validate the window dict, fill in any necessary defaults
        if "window" not in prefs or not isinstance(prefs["window"], dict):
            defaulted_values.add("window")
            prefs["window"] = dict(_WINDOW_DEFAULTS)
        else:
            for key, default in _WINDOW_DEFAULTS.items():
                allow_none = default is None
                if key not in prefs["window"] or not _valid_coord(prefs["window"][key], allow_none):
                    defaulted_values.add(f"window.{key}")
                    prefs["window"][key] = default
            for key in ("width", "height"):
                if prefs["window"][key] <= 0:
                    defaulted_values.add(f"window.{key}")
                    prefs["window"][key] = _WINDOW_DEFAULTS[key]

        # Log results
        if defaulted_values:
            log.warning(f"Loaded prefs from '{PREFS_PATH}', but with missing values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded prefs from '{PREFS_PATH}'.")
        return prefs
    # Fall back to fresh prefs in case of error, but warn in log
    except (json.JSONDecodeError, OSError, TypeError):
        log.warning("Ran into an error while trying to load prefs.json, falling back to fresh prefs.",exc_info=True)
        return build_default_prefs()

# Write the given prefs to disk under PATHS.prefs
def save_prefs(prefs):
    prefs["meta"]["saved_at"] = now_iso()
    with open(PREFS_PATH, "w", encoding="utf-8") as f:
        json.dump(prefs, f, indent=2)
    log.info(f"Successfully saved prefs to '{PREFS_PATH}'")

# Convenience for the window: stamps a geometry into the prefs dict.
def set_window_geometry(prefs, x, y, width, height):
    prefs["window"] = {"x": int(x), "y": int(y), "width": int(width), "height": int(height)}
    return prefs

#endregion === Saving and Loading Prefs ===
