"""
Data migrations between application versions.

Each module defines ``THRESHOLD`` (stores older than this version
need the step) and an idempotent ``apply_migration`` coroutine.
``build_default_registry`` binds them to their collaborators in
ascending threshold order.
"""

from functools import partial

from fedimigrate.config.models import DEFAULT_TEMPLATE_CONTENT
from fedimigrate.migrations import v0_17_0_followers, v1_0_0_templates
from fedimigrate.ports.store import FollowersPort, KeyValueStorePort, RewriteRulesPort
from fedimigrate.services.registry import StepRegistry


def build_default_registry(
    store: KeyValueStorePort,
    followers: FollowersPort,
    rewrite_rules: RewriteRulesPort,
    default_template: str = DEFAULT_TEMPLATE_CONTENT,
) -> StepRegistry:
    """Return the registry of all shipped data migrations."""
    registry = StepRegistry()
    registry.register(
        v0_17_0_followers.THRESHOLD,
        partial(v0_17_0_followers.apply_migration, store, followers, rewrite_rules),
        name="normalize_followers",
    )
    registry.register(
        v1_0_0_templates.THRESHOLD,
        partial(v1_0_0_templates.apply_migration, store, default_template),
        name="rewrite_template_placeholders",
    )
    return registry


__all__ = ["build_default_registry"]
