"""Move per-user follower lists into the normalized followers collection.

Before 0.17.0 each user's followers were a list of actor IDs kept in
the ``legacy_followers`` user meta. The legacy meta is left in place;
re-running only re-adds pairs the collection already holds.
"""

from loguru import logger

from fedimigrate.ports.store import FollowersPort, KeyValueStorePort, RewriteRulesPort

THRESHOLD = "0.17.0"
LEGACY_FOLLOWERS_META = "legacy_followers"


async def apply_migration(
    store: KeyValueStorePort,
    followers: FollowersPort,
    rewrite_rules: RewriteRulesPort,
) -> None:
    """Copy every legacy follower into the collection, then flush routing rules."""
    users = 0
    migrated = 0

    for user_id in await store.list_user_ids():
        actors = await store.get_user_meta(user_id, LEGACY_FOLLOWERS_META)
        if not actors:
            continue
        if isinstance(actors, str):
            actors = [actors]

        for actor in actors:
            await followers.add_follower(user_id, actor)
            migrated += 1
        users += 1

    logger.info("Normalized followers: users={} followers={}", users, migrated)

    await rewrite_rules.flush()
