"""Engine settings, read from ``settings.EVENT_ENGINE``."""

from django.conf import settings

DEFAULTS = {
    "TRANSACTION_MAX_ATTEMPTS": 3,
    "TRANSACTION_RETRY_BACKOFF": 0.05,
    "CLONE_TITLE_SUFFIX": " (Clone)",
}


def engine_setting(name: str):
    if name not in DEFAULTS:
        raise KeyError(f"Unknown EVENT_ENGINE setting: {name}")
    overrides = getattr(settings, "EVENT_ENGINE", {})
    return overrides.get(name, DEFAULTS[name])
