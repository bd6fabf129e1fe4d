"""Tests for the 1.0.0 template placeholder rewrite step."""

import pytest

from fedimigrate.config.models import DEFAULT_TEMPLATE_CONTENT
from fedimigrate.migrations import v1_0_0_templates
from fedimigrate.migrations.v1_0_0_templates import (
    PLACEHOLDER_REPLACEMENTS,
    TEMPLATE_OPTION,
    rewrite_placeholders,
)
from tests.helpers import RecordingStore


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


class TestRewritePlaceholders:
    def test_title_and_tags(self) -> None:
        assert rewrite_placeholders("%title% by %tags%") == "[ap_title] by [ap_hashtags]"

    @pytest.mark.parametrize(("legacy", "tag"), PLACEHOLDER_REPLACEMENTS)
    def test_each_mapping(self, legacy: str, tag: str) -> None:
        assert rewrite_placeholders(f"<p>{legacy}</p>") == f"<p>{tag}</p>"

    def test_seven_mappings(self) -> None:
        assert len(PLACEHOLDER_REPLACEMENTS) == 7

    def test_links_render_as_html(self) -> None:
        assert (
            rewrite_placeholders("%permalink% %shortlink%")
            == '[ap_permalink type="html"] [ap_shortlink type="html"]'
        )

    def test_repeated_placeholder(self) -> None:
        assert rewrite_placeholders("%title%%title%") == "[ap_title][ap_title]"

    def test_no_placeholders_unchanged(self) -> None:
        assert rewrite_placeholders("[ap_content]") == "[ap_content]"

    def test_unknown_placeholder_untouched(self) -> None:
        assert rewrite_placeholders("%author%") == "%author%"


class TestApplyMigration:
    @pytest.mark.asyncio
    async def test_rewrites_and_persists_changed_template(
        self, recording_store: RecordingStore
    ) -> None:
        recording_store.options[TEMPLATE_OPTION] = "%title% by %tags%"

        await v1_0_0_templates.apply_migration(recording_store, DEFAULT_TEMPLATE_CONTENT)

        assert recording_store.options[TEMPLATE_OPTION] == "[ap_title] by [ap_hashtags]"
        assert recording_store.writes == [("set_option", TEMPLATE_OPTION)]

    @pytest.mark.asyncio
    async def test_already_converted_template_not_written(
        self, recording_store: RecordingStore
    ) -> None:
        recording_store.options[TEMPLATE_OPTION] = "[ap_title]\n\n[ap_content]"

        await v1_0_0_templates.apply_migration(recording_store, DEFAULT_TEMPLATE_CONTENT)

        assert recording_store.writes == []

    @pytest.mark.asyncio
    async def test_absent_template_writes_rewritten_default(
        self, recording_store: RecordingStore
    ) -> None:
        await v1_0_0_templates.apply_migration(recording_store, DEFAULT_TEMPLATE_CONTENT)

        assert recording_store.options[TEMPLATE_OPTION] == rewrite_placeholders(
            DEFAULT_TEMPLATE_CONTENT
        )

    @pytest.mark.asyncio
    async def test_absent_template_with_converted_default_not_written(
        self, recording_store: RecordingStore
    ) -> None:
        await v1_0_0_templates.apply_migration(recording_store, "[ap_content]")

        assert recording_store.writes == []

    @pytest.mark.asyncio
    async def test_blank_template_loads_default_and_rewrites(
        self, recording_store: RecordingStore
    ) -> None:
        recording_store.options[TEMPLATE_OPTION] = ""

        await v1_0_0_templates.apply_migration(recording_store, DEFAULT_TEMPLATE_CONTENT)

        stored = recording_store.options[TEMPLATE_OPTION]
        assert stored == rewrite_placeholders(DEFAULT_TEMPLATE_CONTENT)
        assert "%" not in stored

    @pytest.mark.asyncio
    async def test_blank_template_always_written(self, recording_store: RecordingStore) -> None:
        """Even when the default needs no rewriting, a blank is replaced explicitly."""
        recording_store.options[TEMPLATE_OPTION] = ""

        await v1_0_0_templates.apply_migration(recording_store, "[ap_content]")

        assert recording_store.options[TEMPLATE_OPTION] == "[ap_content]"
        assert recording_store.writes == [("set_option", TEMPLATE_OPTION)]

    @pytest.mark.asyncio
    async def test_whitespace_only_template_kept(self, recording_store: RecordingStore) -> None:
        """Only an empty string falls back to the default."""
        recording_store.options[TEMPLATE_OPTION] = "  \n"

        await v1_0_0_templates.apply_migration(recording_store, "%title%")

        assert recording_store.options[TEMPLATE_OPTION] == "  \n"
        assert recording_store.writes == []

    @pytest.mark.asyncio
    async def test_rerun_is_noop(self, recording_store: RecordingStore) -> None:
        recording_store.options[TEMPLATE_OPTION] = "%excerpt% %permalink%"

        await v1_0_0_templates.apply_migration(recording_store, DEFAULT_TEMPLATE_CONTENT)
        await v1_0_0_templates.apply_migration(recording_store, DEFAULT_TEMPLATE_CONTENT)

        assert len(recording_store.writes) == 1

    def test_threshold(self) -> None:
        assert v1_0_0_templates.THRESHOLD == "1.0.0"
