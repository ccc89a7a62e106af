import logging
from typing import Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from ..config import (
    SENTRY_DSN,
    SENTRY_ENVIRONMENT,
    SENTRY_PROFILES_SAMPLE_RATE,
    SENTRY_TRACES_SAMPLE_RATE,
)

logger = logging.getLogger(__name__)


def init_sentry(
    dsn: Optional[str] = SENTRY_DSN,
    *,
    environment: Optional[str] = SENTRY_ENVIRONMENT,
    traces_sample_rate: float = SENTRY_TRACES_SAMPLE_RATE,
    profiles_sample_rate: float = SENTRY_PROFILES_SAMPLE_RATE,
) -> bool:
    """Start error reporting when a DSN is configured; returns whether it did."""
    if not dsn:
        logger.info("SENTRY_DSN not provided; error reporting disabled.")
        return False

    sentry_sdk.init(
        dsn=dsn,
        integrations=[FastApiIntegration()],
        environment=environment,
        traces_sample_rate=traces_sample_rate,
        profiles_sample_rate=profiles_sample_rate,
    )
    sentry_sdk.set_tag("service", "golfcomp")
    logger.info(
        "Error reporting enabled%s (traces=%.2f)",
        f" for {environment}" if environment else "",
        traces_sample_rate,
    )
    return True
