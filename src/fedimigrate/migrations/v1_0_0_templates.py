"""Rewrite the custom post template from %placeholders% to [ap_*] tags."""

from loguru import logger

from fedimigrate.ports.store import KeyValueStorePort

THRESHOLD = "1.0.0"
TEMPLATE_OPTION = "custom_template_content"

# Tokens are disjoint, so application order does not matter
PLACEHOLDER_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("%title%", "[ap_title]"),
    ("%excerpt%", "[ap_excerpt]"),
    ("%content%", "[ap_content]"),
    ("%permalink%", '[ap_permalink type="html"]'),
    ("%shortlink%", '[ap_shortlink type="html"]'),
    ("%hashtags%", "[ap_hashtags]"),
    ("%tags%", "[ap_hashtags]"),
)


def rewrite_placeholders(content: str) -> str:
    """Replace every legacy placeholder in content with its tag."""
    for legacy, tag in PLACEHOLDER_REPLACEMENTS:
        content = content.replace(legacy, tag)
    return content


async def apply_migration(store: KeyValueStorePort, default_content: str) -> None:
    """
    Rewrite the stored template, falling back to default_content.

    An empty stored template is replaced by the rewritten default and
    always written, so the store ends up with an explicit value.
    """
    old_content = await store.get_option(TEMPLATE_OPTION)
    need_update = False

    if old_content is None:
        old_content = default_content
    elif old_content == "":
        old_content = default_content
        need_update = True

    content = rewrite_placeholders(str(old_content))

    if content != old_content or need_update:
        await store.set_option(TEMPLATE_OPTION, content)
        logger.info("Custom template rewritten to tag syntax")
    else:
        logger.debug("Custom template already uses tag syntax")
