"""Error reporting for the scoring service.

Reporting is off unless ``SENTRY_DSN`` is set. Bad bowling input is answered
with a 4xx problem and is never worth an event, so it is dropped before send.
"""
import logging
import os
from importlib import metadata

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from ..exceptions import DomainException
from ..scoring.bowling import InvalidFrameData
from ..services.validation import ValidationError

logger = logging.getLogger(__name__)

SERVICE_NAME = "bowlscore"

EXPECTED_ERRORS = (DomainException, InvalidFrameData, ValidationError)


def _rate_from_env(name: str, default: float = 0.0) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default

    try:
        rate = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a valid float, using %.2f", name, raw, default)
        return default

    if not 0.0 <= rate <= 1.0:
        logger.warning("Ignoring %s=%r: rate must be within [0, 1], using %.2f", name, raw, default)
        return default
    return rate


def _release() -> str:
    explicit = (os.getenv("SENTRY_RELEASE") or "").strip()
    if explicit:
        return explicit
    try:
        return f"{SERVICE_NAME}@{metadata.version(SERVICE_NAME)}"
    except metadata.PackageNotFoundError:
        # running from a source checkout
        return SERVICE_NAME


def drop_expected_errors(event, hint):
    exc_info = hint.get("exc_info")
    if exc_info and isinstance(exc_info[1], EXPECTED_ERRORS):
        return None
    return event


def init_sentry() -> bool:
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        logger.info("SENTRY_DSN not set; error reporting disabled")
        return False

    environment = (os.getenv("SENTRY_ENVIRONMENT") or "").strip() or None
    release = _release()
    sentry_sdk.init(
        dsn=dsn,
        integrations=[FastApiIntegration()],
        environment=environment,
        release=release,
        traces_sample_rate=_rate_from_env("SENTRY_TRACES_SAMPLE_RATE"),
        profiles_sample_rate=_rate_from_env("SENTRY_PROFILES_SAMPLE_RATE"),
        before_send=drop_expected_errors,
    )
    sentry_sdk.set_tag("service", SERVICE_NAME)
    logger.info("Sentry reporting enabled for %s (environment=%s)", release, environment)
    return True
