"""Unit tests for PodSession."""

from __future__ import annotations

import asyncio
import json
from unittest.mock import MagicMock

import pytest

from podpilot.constants.enums import FetchState, ResourceClass
from podpilot.controllers.session import PodSession
from podpilot.errors import NoMarksError, ParseFailure, ProcessFailure
from podpilot.models.state.app_settings import AppSettings


@pytest.fixture
def on_change() -> MagicMock:
    return MagicMock()


@pytest.fixture
def session(fake_runner, on_change) -> PodSession:
    """Session with manual refresh only."""
    return PodSession(
        AppSettings(auto_refresh=False, namespace="apps"),
        runner=fake_runner,
        on_change=on_change,
    )


@pytest.fixture
def loaded(session, fake_runner, make_pod_list, kubeconfig) -> PodSession:
    """Session after one successful refresh of both classes."""
    session.start()
    fake_runner.last("config").succeed(json.dumps(kubeconfig))
    fake_runner.last("pods").succeed(json.dumps(make_pod_list("web-0", "web-1")))
    return session


class TestRefresh:
    """Tests for fetching into the store."""

    def test_start_polls_both_classes(self, session, fake_runner) -> None:
        session.start()

        assert fake_runner.last("pods").command == (
            "kubectl", "--namespace", "apps", "get", "pods", "-o", "json",
        )
        assert fake_runner.last("config").command == ("kubectl", "config", "view", "-o", "json")
        assert session.store.fetch_status(ResourceClass.PODS).state is FetchState.LOADING

    def test_results_reach_the_store(self, loaded, on_change) -> None:
        assert [pod.name for pod in loaded.store.pods()] == ["web-0", "web-1"]
        assert loaded.context().name == "staging"
        assert on_change.called

    def test_namespace_prefers_explicit_setting(self, loaded) -> None:
        assert loaded.namespace == "apps"

    def test_namespace_falls_back_to_context(self, fake_runner, kubeconfig) -> None:
        session = PodSession(AppSettings(auto_refresh=False), runner=fake_runner)
        session.start()
        fake_runner.last("config").succeed(json.dumps(kubeconfig))

        assert session.namespace == "apps"

    def test_failed_fetch_is_recorded(self, loaded, fake_runner) -> None:
        loaded.refresh_all()
        fake_runner.last("pods").fail("error: You must be logged in to the server (Unauthorized)", 1)

        status = loaded.store.fetch_status(ResourceClass.PODS)
        assert status.state is FetchState.ERROR
        assert "Unauthorized" in status.error_message
        assert len(loaded.store.pods()) == 2

    def test_unparseable_output_is_recorded(self, session, fake_runner) -> None:
        session.start()
        fake_runner.last("pods").succeed("No resources found")

        assert session.store.fetch_status(ResourceClass.PODS).state is FetchState.ERROR

    def test_manual_refresh_is_deduplicated(self, session, fake_runner) -> None:
        session.start()
        session.refresh_all()

        assert len(fake_runner.commands_with("pods")) == 1

    @pytest.mark.asyncio
    async def test_auto_refresh_starts_timer(self, fake_runner) -> None:
        session = PodSession(AppSettings(refresh_interval=60), runner=fake_runner)
        session.start()
        await asyncio.sleep(0)

        assert session.orchestrator.running
        assert len(fake_runner.handles) == 2
        session.teardown()


class TestMarks:
    """Tests for mark and delete entry points."""

    def test_mark_and_execute(self, loaded, fake_runner) -> None:
        assert loaded.mark("web-0") is True

        assert loaded.execute_marks() == ["web-0"]
        assert loaded.store.is_pending("web-0")

    def test_execute_without_marks(self, loaded) -> None:
        with pytest.raises(NoMarksError):
            loaded.execute_marks()

    def test_successful_delete_triggers_refresh(self, loaded, fake_runner) -> None:
        loaded.mark("web-0")
        loaded.execute_marks()

        fake_runner.last("delete").succeed("pod/web-0\n")

        assert len(fake_runner.commands_with("pods")) == 2

    def test_delete_error_callback(self, fake_runner, make_pod_list) -> None:
        on_delete_error = MagicMock()
        session = PodSession(
            AppSettings(auto_refresh=False), runner=fake_runner, on_delete_error=on_delete_error
        )
        session.start()
        fake_runner.last("pods").succeed(json.dumps(make_pod_list("web-0")))
        session.mark("web-0")
        session.execute_marks()

        fake_runner.last("delete").fail("error: forbidden", 1)

        assert on_delete_error.call_args.args[0] == "web-0"
        assert not session.store.is_pending("web-0")

    def test_unmark_all(self, loaded) -> None:
        loaded.mark("web-0")
        loaded.mark("web-1")

        loaded.unmark_all()

        assert loaded.store.marked == frozenset()


class TestSetNamespace:
    """Tests for switching namespaces."""

    def test_switch_refetches_pods(self, loaded, fake_runner) -> None:
        loaded.mark("web-0")

        loaded.set_namespace("batch")

        assert loaded.namespace == "batch"
        assert loaded.settings.namespace == "batch"
        assert loaded.store.marked == frozenset()
        assert not loaded.store.has_snapshot(ResourceClass.PODS)
        assert "batch" in fake_runner.last("pods").command

    def test_switch_cancels_in_flight_pods_query(self, loaded, fake_runner) -> None:
        loaded.refresh_all()
        stale = fake_runner.last("pods")

        loaded.set_namespace("batch")

        assert stale.cancelled
        assert fake_runner.last("pods") is not stale

    def test_same_namespace_is_noop(self, loaded, fake_runner) -> None:
        before = len(fake_runner.handles)

        loaded.set_namespace("apps")

        assert len(fake_runner.handles) == before

    def test_empty_namespace_means_context_default(self, loaded) -> None:
        loaded.set_namespace("")

        assert loaded.commands.namespace is None
        assert loaded.namespace == "apps"


class TestQueries:
    """Tests for one-shot queries and rendering."""

    @pytest.mark.asyncio
    async def test_describe_pod(self, session, fake_runner) -> None:
        fake_runner.run_once_outputs["describe"] = "Name: web-0\n"

        assert await session.describe_pod("web-0") == "Name: web-0\n"
        assert fake_runner.run_once_calls == [("--namespace", "apps", "describe", "pod", "web-0")]

    @pytest.mark.asyncio
    async def test_pod_logs_uses_configured_tail(self, session, fake_runner) -> None:
        fake_runner.run_once_outputs["logs"] = "ready\n"

        await session.pod_logs("web-0")
        await session.pod_logs("web-0", tail=10)

        assert fake_runner.run_once_calls[0][-1] == "--tail=200"
        assert fake_runner.run_once_calls[1][-1] == "--tail=10"

    @pytest.mark.asyncio
    async def test_query_failure_propagates(self, session) -> None:
        with pytest.raises(ProcessFailure):
            await session.describe_pod("missing")

    def test_render_pod(self, loaded) -> None:
        text = loaded.render_pod("web-0")

        assert text is not None
        assert text.plain.startswith("---\nmetadata:\n  name: web-0")
        assert loaded.render_pod("missing") is None

    @pytest.mark.asyncio
    async def test_wait_for(self, session, fake_runner, kubeconfig) -> None:
        task = asyncio.create_task(session.wait_for(ResourceClass.CONTEXT))
        await asyncio.sleep(0)

        fake_runner.last("config").succeed(json.dumps(kubeconfig))

        assert await task == kubeconfig
        assert session.context().cluster == "staging-cluster"

    @pytest.mark.asyncio
    async def test_wait_for_raises_on_malformed_pod(
        self, session, fake_runner, make_pod, make_pod_list
    ) -> None:
        pod = make_pod("web-0")
        pod["status"]["containerStatuses"][0]["restartCount"] = -1
        task = asyncio.create_task(session.wait_for(ResourceClass.PODS))
        await asyncio.sleep(0)

        fake_runner.last("pods").succeed(json.dumps(make_pod_list(pod)))

        with pytest.raises(ParseFailure, match="restartCount"):
            await task
        assert session.store.fetch_status(ResourceClass.PODS).state is FetchState.ERROR
        assert not session.store.has_snapshot(ResourceClass.PODS)

    @pytest.mark.asyncio
    async def test_check_connection_failure(self, session, fake_runner) -> None:
        task = asyncio.create_task(session.check_connection())
        await asyncio.sleep(0)

        fake_runner.last("config").fail("error: connection refused", 1)

        assert await task is False


class TestTeardown:
    """Tests for session teardown."""

    def test_teardown_cancels_everything(self, loaded, fake_runner) -> None:
        loaded.refresh_all()
        loaded.mark("web-0")
        loaded.execute_marks()

        loaded.teardown()

        assert all(handle.done for handle in fake_runner.handles)
        assert loaded.store.pods() == []
        assert loaded.store.marked == frozenset()

    def test_teardown_is_idempotent(self, loaded) -> None:
        loaded.teardown()
        loaded.teardown()

        assert loaded.store.pods() == []

    def test_no_refresh_after_teardown(self, loaded, fake_runner) -> None:
        loaded.teardown()
        before = len(fake_runner.handles)

        loaded.refresh_all()
        loaded.set_namespace("batch")

        assert len(fake_runner.handles) == before
