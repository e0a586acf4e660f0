"""Shared fixtures: a scripted process runner and pod JSON builders."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import Any

import pytest

from podpilot.controllers.process.runner import (
    Failure,
    FailureCallback,
    Success,
    SuccessCallback,
)
from podpilot.errors import ProcessFailure


class FakeHandle:
    """Stands in for ProcessHandle; completes only when a test says so."""

    def __init__(
        self,
        command: Sequence[str],
        on_success: SuccessCallback,
        on_failure: FailureCallback | None,
    ) -> None:
        self.command = tuple(command)
        self.on_success = on_success
        self.on_failure = on_failure
        self.cancel_calls = 0
        self.cancelled = False
        self.finished = False

    @property
    def done(self) -> bool:
        return self.cancelled or self.finished

    def cancel(self) -> None:
        self.cancel_calls += 1
        self.cancelled = True

    def succeed(self, output: str = "") -> None:
        assert not self.done, "handle already completed"
        self.finished = True
        self.on_success(Success(output))

    def fail(self, output: str = "error: boom", exit_status: int = 1) -> None:
        assert not self.done, "handle already completed"
        self.finished = True
        failure = Failure(output, exit_status)
        if self.on_failure is None:
            raise ProcessFailure(output, exit_status, self.command)
        self.on_failure(failure)


class FakeRunner:
    """Records every command instead of spawning it."""

    def __init__(self) -> None:
        self.handles: list[FakeHandle] = []
        self.run_once_outputs: dict[str, str] = {}
        self.run_once_calls: list[tuple[str, ...]] = []

    def run(
        self,
        args: Sequence[str],
        on_success: SuccessCallback,
        on_failure: FailureCallback | None = None,
    ) -> FakeHandle:
        handle = FakeHandle(("kubectl", *args), on_success, on_failure)
        self.handles.append(handle)
        return handle

    async def run_once(self, args: Sequence[str]) -> str:
        self.run_once_calls.append(tuple(args))
        for verb, output in self.run_once_outputs.items():
            if verb in args:
                return output
        raise ProcessFailure("error: not scripted", 1, ("kubectl", *args))

    def commands_with(self, verb: str) -> list[FakeHandle]:
        return [handle for handle in self.handles if verb in handle.command]

    def last(self, verb: str) -> FakeHandle:
        matching = self.commands_with(verb)
        assert matching, f"no {verb!r} command was run"
        return matching[-1]


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Create a scripted runner."""
    return FakeRunner()


def _pod(
    name: str,
    phase: str = "Running",
    *,
    namespace: str | None = "default",
    restart_count: int = 0,
    image: str = "nginx:1.25",
    ready: bool = True,
    start_time: str | None = "2024-05-01T10:00:00Z",
    state: dict[str, Any] | None = None,
    deleting: bool = False,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name}
    if namespace is not None:
        metadata["namespace"] = namespace
    if deleting:
        metadata["deletionTimestamp"] = "2024-05-01T11:00:00Z"
    status: dict[str, Any] = {
        "phase": phase,
        "hostIP": "10.0.0.1",
        "podIP": "10.1.0.7",
        "containerStatuses": [
            {
                "name": "main",
                "image": image,
                "ready": ready,
                "restartCount": restart_count,
                "state": state if state is not None else {"running": {}},
            }
        ],
    }
    if start_time is not None:
        status["startTime"] = start_time
    return {
        "metadata": metadata,
        "spec": {"containers": [{"name": "main", "image": image}]},
        "status": status,
    }


@pytest.fixture
def make_pod() -> Callable[..., dict[str, Any]]:
    """Build one raw pod item."""
    return _pod


@pytest.fixture
def make_pod_list() -> Callable[..., dict[str, Any]]:
    """Build a ``get pods -o json`` document from names or pod items."""

    def _build(*pods: str | dict[str, Any]) -> dict[str, Any]:
        items = [_pod(pod) if isinstance(pod, str) else pod for pod in pods]
        return {"apiVersion": "v1", "kind": "List", "items": items}

    return _build


@pytest.fixture
def kubeconfig() -> dict[str, Any]:
    """A minimal ``kubectl config view -o json`` document."""
    return {
        "current-context": "staging",
        "contexts": [
            {"name": "prod", "context": {"cluster": "prod-cluster", "namespace": "web"}},
            {"name": "staging", "context": {"cluster": "staging-cluster", "namespace": "apps"}},
        ],
    }


@pytest.fixture
def to_json() -> Callable[[Any], str]:
    return json.dumps
