"""Tests for release command."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
import typer
from rich.console import Console

from pyangler.commands import (
    CommandContext,
    PublishStatus,
    ReleaseCommand,
    ReleaseEvent,
    ReleaseOptions,
    release,
)
from pyangler.commands.release import format_tag_message, handle_release_command
from pyangler.config import PyAnglerConfig, ReleaseConfig
from pyangler.errors import CommandError, ReleaseError
from pyangler.git import NoBase
from pyangler.registry import PublishOptions
from pyangler.workspace import Workspace, topological_sort

WorkspaceFactory = Callable[..., Workspace]


@pytest.fixture
def git_calls() -> Iterator[dict[str, AsyncMock]]:
    """Patch git queries and tagging."""
    with (
        patch("pyangler.commands.base.fetch_unshallow", new_callable=AsyncMock),
        patch(
            "pyangler.commands.base.resolve_base_ref",
            new_callable=AsyncMock,
            return_value=NoBase(),
        ),
        patch(
            "pyangler.commands.base.get_uncommitted", new_callable=AsyncMock, return_value=[]
        ) as uncommitted,
        patch("pyangler.commands.base.fetch_ref", new_callable=AsyncMock),
        patch("pyangler.commands.release.create_annotated_tag", new_callable=AsyncMock) as tag,
        patch("pyangler.commands.release.push_tag", new_callable=AsyncMock) as push,
    ):
        yield {"get_uncommitted": uncommitted, "create_annotated_tag": tag, "push_tag": push}


@pytest.fixture
def context(workspace_dir: Path, fake_registry) -> CommandContext:
    return CommandContext(root=workspace_dir, registry=fake_registry)


def test_format_tag_message(make_workspace: WorkspaceFactory) -> None:
    message = format_tag_message(
        "Released by pyangler.", [make_workspace("a", "1.0.0"), make_workspace("b", "2.0.0rc1")]
    )
    assert message == "Released by pyangler.\n\na==1.0.0\nb==2.0.0rc1"


class TestReleaseCommand:
    """Tests for ReleaseCommand."""

    async def test_publishes_in_dependency_order(
        self, context: CommandContext, git_calls
    ) -> None:
        result = await release(context)

        assert result.published == ["pkg-a", "pkg-b", "pkg-c"]
        assert result.skipped == ["test-workspace"]
        assert [name for name, _ in context.registry.uploads] == ["pkg-a", "pkg-b", "pkg-c"]

    async def test_tags_before_publishing(self, context: CommandContext, git_calls) -> None:
        result = await release(context)

        assert result.tag is not None
        assert result.tag.startswith("release-")
        git_calls["create_annotated_tag"].assert_awaited_once()
        root, name, message = git_calls["create_annotated_tag"].await_args.args
        assert root == context.root
        assert name == result.tag
        assert message.splitlines() == [
            "Released by pyangler.",
            "",
            "pkg-a==1.0.0",
            "pkg-b==2.0.0",
            "pkg-c==0.1.0",
        ]
        git_calls["push_tag"].assert_awaited_once_with(context.root, result.tag)

    async def test_custom_tag_format(
        self, workspace_dir: Path, fake_registry, git_calls
    ) -> None:
        context = CommandContext(
            root=workspace_dir,
            registry=fake_registry,
            config=PyAnglerConfig(release=ReleaseConfig(tag_format="v-{timestamp}-rel")),
        )
        with patch("pyangler.commands.release.time.time", return_value=1700000000.5):
            result = await release(context)
        assert result.tag == "v-1700000000500-rel"

    @pytest.mark.parametrize("options", [ReleaseOptions(tag=False), ReleaseOptions(dry_run=True)])
    async def test_no_tag(
        self, context: CommandContext, git_calls, options: ReleaseOptions
    ) -> None:
        result = await ReleaseCommand(context, options).execute()

        assert result.tag is None
        git_calls["create_annotated_tag"].assert_not_awaited()
        git_calls["push_tag"].assert_not_awaited()
        assert result.published == ["pkg-a", "pkg-b", "pkg-c"]

    async def test_dry_run_passed_to_registry(self, context: CommandContext, git_calls) -> None:
        await release(context, dry_run=True, registry="https://test.pypi.org/legacy/")

        _, options = context.registry.uploads[0]
        assert options == PublishOptions(
            prerelease=False, dry_run=True, channel_override="https://test.pypi.org/legacy/"
        )

    async def test_nothing_to_release_creates_no_tag(
        self, context: CommandContext, git_calls, make_workspace: WorkspaceFactory
    ) -> None:
        workspaces = topological_sort(
            [
                make_workspace("a", modified=False, published=True),
                make_workspace("b", private=True),
            ]
        )
        events: list[ReleaseEvent] = []

        with patch(
            "pyangler.commands.base.build_workspaces",
            new_callable=AsyncMock,
            return_value=workspaces,
        ):
            result = await release(context, on_event=events.append)

        assert result.nothing_to_release
        assert result.tag is None
        git_calls["create_annotated_tag"].assert_not_awaited()
        assert context.registry.uploads == []
        assert events == []

    async def test_skips_published_unmodified(
        self, context: CommandContext, git_calls, make_workspace: WorkspaceFactory
    ) -> None:
        workspaces = topological_sort(
            [
                make_workspace("a", modified=False, published=True),
                make_workspace("b", private=True),
                make_workspace("c", modified=False),
            ]
        )
        events: list[ReleaseEvent] = []

        with patch(
            "pyangler.commands.base.build_workspaces",
            new_callable=AsyncMock,
            return_value=workspaces,
        ):
            result = await release(context, on_event=events.append)

        assert result.published == ["c"]
        assert [(e.workspace.name, e.status, e.reason) for e in events] == [
            ("a", PublishStatus.SKIPPED, "published"),
            ("b", PublishStatus.SKIPPED, "private"),
            ("c", PublishStatus.PUBLISHING, "unpublished"),
            ("c", PublishStatus.SUCCEEDED, ""),
        ]

    async def test_publish_failure_stops_release(
        self, context: CommandContext, git_calls
    ) -> None:
        context.registry.fail_on = "pkg-b"
        events: list[ReleaseEvent] = []

        with pytest.raises(CommandError):
            await release(context, on_event=events.append)

        assert [name for name, _ in context.registry.uploads] == ["pkg-a"]
        assert (events[-1].workspace.name, events[-1].status) == ("pkg-b", PublishStatus.FAILED)
        # the tag already exists when publishing starts
        git_calls["create_annotated_tag"].assert_awaited_once()

    async def test_prerelease_required(self, context: CommandContext, git_calls) -> None:
        with pytest.raises(ReleaseError, match="pkg-a: Use a prerelease version."):
            await release(context, require_prerelease=True)

        assert context.registry.uploads == []

    async def test_prerelease_versions_routed(
        self, context: CommandContext, git_calls, make_workspace: WorkspaceFactory
    ) -> None:
        workspaces = topological_sort([make_workspace("a", "1.0.0b1")])

        with patch(
            "pyangler.commands.base.build_workspaces",
            new_callable=AsyncMock,
            return_value=workspaces,
        ):
            result = await release(context, require_prerelease=True)

        assert result.published == ["a"]
        _, options = context.registry.uploads[0]
        assert options.prerelease is True

    async def test_uncommitted_changes(self, context: CommandContext, git_calls) -> None:
        git_calls["get_uncommitted"].return_value = ["x.py"]

        result = await release(context)

        assert not result.success
        assert result.published == []
        git_calls["create_annotated_tag"].assert_not_awaited()


class TestHandleReleaseCommand:
    """Tests for CLI output of the release command."""

    async def test_progress_output(self, context: CommandContext, git_calls) -> None:
        console = Console(record=True, width=200)
        error_console = Console(record=True, width=200)

        await handle_release_command(context, console=console, error_console=error_console)

        output = console.export_text()
        assert "pkg-a: publishing v1.0.0 (modified)...succeeded." in output
        assert "test-workspace: skipped v0.0.0 (private)." in output
        assert "Tagged release: release-" in output
        assert "Released 3 workspaces" in output

    async def test_command_failure_exit_code(self, context: CommandContext, git_calls) -> None:
        console = Console(record=True, width=200)
        error_console = Console(record=True, width=200)
        context.registry.fail_on = "pkg-a"

        with pytest.raises(typer.Exit) as exc_info:
            await handle_release_command(context, console=console, error_console=error_console)

        assert exc_info.value.exit_code == 1
        assert "pkg-a: publishing v1.0.0 (modified)...failed." in console.export_text()
        assert "> uv publish" in error_console.export_text()
        assert "upload rejected" in error_console.export_text()
