import logging
import os

logger = logging.getLogger(__name__)


def _canon_prefix(val):
    """
    Normalize API prefix to always be exactly like '/api':
      - defaults to '/api' when unset/empty
      - ensures a single leading slash
      - removes any trailing slash (except for root)
    """
    val = (val or "/api").strip()
    if not val.startswith("/"):
        val = "/" + val
    if len(val) > 1 and val.endswith("/"):
        val = val[:-1]
    return val


def _skins_scoring(val):
    val = (val or "gross").strip().lower()
    if val not in {"gross", "net"}:
        raise ValueError("DEFAULT_SKINS_SCORING must be 'gross' or 'net'")
    return val


def parse_origins(raw):
    """Split a comma-separated origin list; wildcards are rejected."""
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    if "*" in origins:
        raise ValueError(
            "ALLOWED_ORIGINS cannot include '*' (wildcard). Specify explicit, trusted origins."
        )
    return origins


def parse_sample_rate(name, raw, default=0.0):
    """Sentry sample rates fall back to ``default`` when unset or malformed."""
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("%s is not a number (got %r); using %.2f", name, raw, default)
        return default
    if not 0.0 <= value <= 1.0:
        logger.warning("%s must be within [0, 1] (got %r); using %.2f", name, raw, default)
        return default
    return value


API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))

ALLOWED_ORIGINS = parse_origins(os.getenv("ALLOWED_ORIGINS"))
ALLOW_CREDENTIALS = os.getenv("ALLOW_CREDENTIALS", "true").lower() == "true"

DEFAULT_SKINS_SCORING = _skins_scoring(os.getenv("DEFAULT_SKINS_SCORING"))

SENTRY_DSN = os.getenv("SENTRY_DSN") or None
SENTRY_ENVIRONMENT = (os.getenv("SENTRY_ENVIRONMENT") or "").strip() or None
SENTRY_TRACES_SAMPLE_RATE = parse_sample_rate(
    "SENTRY_TRACES_SAMPLE_RATE", os.getenv("SENTRY_TRACES_SAMPLE_RATE")
)
SENTRY_PROFILES_SAMPLE_RATE = parse_sample_rate(
    "SENTRY_PROFILES_SAMPLE_RATE", os.getenv("SENTRY_PROFILES_SAMPLE_RATE")
)
