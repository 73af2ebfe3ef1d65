"""
Feature Flags

Gradual rollout switches for scheduling capabilities. Evaluated by the
calling layer; the scheduling engine itself never consults them.
"""

import hashlib
from collections.abc import Callable

from pydantic import BaseModel, Field

from .config import Settings, settings


class FeatureFlag(BaseModel):
    """A feature switch with allow-list and percentage rollout."""

    enabled: bool = False
    rollout_percentage: int = Field(default=0, ge=0, le=100)
    enabled_for: list[str] = Field(default_factory=list)


def smart_scheduling_flag(config: Settings | None = None) -> FeatureFlag:
    """Build the smart scheduling flag from settings."""
    config = config or settings
    return FeatureFlag(
        enabled=config.FEATURE_SMART_SCHEDULING_SUGGESTIONS,
        rollout_percentage=config.FEATURE_SMART_SCHEDULING_SUGGESTIONS_ROLLOUT,
        enabled_for=list(config.FEATURE_SMART_SCHEDULING_SUGGESTIONS_ENABLED_FOR),
    )


def rollout_bucket(identifier: str) -> int:
    """Stable 0-99 bucket for an identifier."""
    digest = hashlib.sha256(identifier.encode("utf-8")).hexdigest()
    return int(digest[:8], 16) % 100


def is_feature_enabled(
    flag: FeatureFlag, user_id: str | None = None, tenant_id: str | None = None
) -> bool:
    """
    Check if a feature is enabled for a specific user/tenant.

    A globally disabled flag is off for everyone. Otherwise the allow-list
    wins, then the percentage rollout decides by hashing the user (or
    tenant) identifier into a stable bucket.
    """
    if not flag.enabled:
        return False

    if user_id and user_id in flag.enabled_for:
        return True
    if tenant_id and tenant_id in flag.enabled_for:
        return True

    if flag.rollout_percentage >= 100:
        return True
    if flag.rollout_percentage > 0:
        identifier = user_id or tenant_id or "anonymous"
        return rollout_bucket(identifier) < flag.rollout_percentage

    return False


def capability_check(
    flag: FeatureFlag, user_id: str | None = None, tenant_id: str | None = None
) -> Callable[[], bool]:
    """Bind a flag to a caller, producing the boolean check injected into services."""
    return lambda: is_feature_enabled(flag, user_id=user_id, tenant_id=tenant_id)
