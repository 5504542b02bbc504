import os

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


def _split_origins(raw):
    return [o.strip() for o in (raw or "").split(",") if o.strip()]


API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
if LOG_LEVEL not in _LOG_LEVELS:
    LOG_LEVEL = "INFO"

# Empty means the API is only served same-origin and CORS is not mounted
ALLOWED_ORIGINS = _split_origins(os.getenv("ALLOWED_ORIGINS"))
ALLOW_CREDENTIALS = os.getenv("ALLOW_CREDENTIALS", "true").lower() == "true"
