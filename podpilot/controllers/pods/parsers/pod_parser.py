"""Pod parser - validates the pods snapshot and projects it into PodInfo."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import suppress
from datetime import datetime
from typing import Any

from podpilot.constants.enums import ResourceClass
from podpilot.errors import ParseFailure
from podpilot.models.core.pod_info import PodInfo


def _fail(message: str) -> ParseFailure:
    return ParseFailure(message, ResourceClass.PODS)


class PodParser:
    """Parses ``kubectl get pods -o json`` output into structured formats."""

    _TERMINATING_STATE = "Terminating"
    _CONTAINER_STATE_KEYS = ("waiting", "terminated")

    def items(self, data: Any) -> list[Mapping[str, Any]]:
        """Return the raw pod items, checking the list envelope."""
        if not isinstance(data, Mapping):
            raise _fail("Pod list is not a JSON object")
        items = data.get("items")
        if not isinstance(items, list):
            raise _fail("Pod list has no 'items' array")
        for index, item in enumerate(items):
            if not isinstance(item, Mapping):
                raise _fail(f"Pod item {index} is not a JSON object")
        return items

    @staticmethod
    def pod_name(pod: Mapping[str, Any]) -> str:
        metadata = pod.get("metadata")
        if not isinstance(metadata, Mapping):
            raise _fail("Pod has no metadata")
        name = metadata.get("name")
        if not isinstance(name, str) or not name:
            raise _fail("Pod metadata has no name")
        return name

    def pod_names(self, data: Any) -> list[str]:
        """Names of all pods in the snapshot, in snapshot order.

        Raises:
            ParseFailure: The snapshot is malformed or names repeat.
        """
        names: list[str] = []
        seen: set[str] = set()
        for pod in self.items(data):
            name = self.pod_name(pod)
            if name in seen:
                raise _fail(f"Duplicate pod name {name!r}")
            seen.add(name)
            names.append(name)
        return names

    def find_pod(self, data: Any, name: str) -> Mapping[str, Any] | None:
        """Return the raw pod item with the given name, if present."""
        for pod in self.items(data):
            if self.pod_name(pod) == name:
                return pod
        return None

    def parse_pod_list(self, data: Any) -> list[PodInfo]:
        """Parse every pod in the snapshot.

        Args:
            data: Decoded ``kubectl get pods -o json`` document.

        Returns:
            PodInfo objects in snapshot order.
        """
        self.pod_names(data)
        return [self.parse_pod(pod) for pod in self.items(data)]

    def parse_pod(self, pod: Mapping[str, Any]) -> PodInfo:
        """Parse a single raw pod into PodInfo."""
        name = self.pod_name(pod)
        metadata = pod["metadata"]
        status = pod.get("status")
        if not isinstance(status, Mapping):
            raise _fail(f"Pod {name!r} has no status")
        phase = status.get("phase")
        if not isinstance(phase, str) or not phase:
            raise _fail(f"Pod {name!r} has no phase")

        container_statuses = status.get("containerStatuses") or []
        if not isinstance(container_statuses, list) or not all(
            isinstance(cs, Mapping) for cs in container_statuses
        ):
            raise _fail(f"Pod {name!r} has malformed containerStatuses")

        spec = pod.get("spec")
        spec_containers: list[Any] = []
        if isinstance(spec, Mapping) and isinstance(spec.get("containers"), list):
            spec_containers = spec["containers"]

        namespace = metadata.get("namespace")
        return PodInfo(
            name=name,
            namespace=namespace if isinstance(namespace, str) else None,
            phase=phase,
            state=self._derive_state(metadata, phase, container_statuses),
            image=self._first_image(container_statuses, spec_containers),
            host_ip=self._optional_str(status.get("hostIP")),
            pod_ip=self._optional_str(status.get("podIP")),
            start_time=self._parse_start_time(name, status.get("startTime")),
            restart_count=self._restart_count(name, container_statuses),
            ready_containers=sum(1 for cs in container_statuses if cs.get("ready") is True),
            total_containers=max(len(spec_containers), len(container_statuses)),
        )

    @staticmethod
    def _optional_str(value: Any) -> str | None:
        return value if isinstance(value, str) and value else None

    @classmethod
    def _derive_state(
        cls,
        metadata: Mapping[str, Any],
        phase: str,
        container_statuses: list[Mapping[str, Any]],
    ) -> str:
        """Pick the most telling state: terminating, a container reason, or phase."""
        if metadata.get("deletionTimestamp"):
            return cls._TERMINATING_STATE
        for container_status in container_statuses:
            state = container_status.get("state")
            if not isinstance(state, Mapping):
                continue
            for key in cls._CONTAINER_STATE_KEYS:
                detail = state.get(key)
                if isinstance(detail, Mapping) and detail.get("reason"):
                    return str(detail["reason"])
        return phase

    @staticmethod
    def _first_image(
        container_statuses: list[Mapping[str, Any]],
        spec_containers: list[Any],
    ) -> str | None:
        for container in (*container_statuses, *spec_containers):
            if isinstance(container, Mapping):
                image = container.get("image")
                if isinstance(image, str) and image:
                    return image
        return None

    @staticmethod
    def _restart_count(name: str, container_statuses: list[Mapping[str, Any]]) -> int:
        total = 0
        for container_status in container_statuses:
            count = container_status.get("restartCount", 0)
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise _fail(f"Pod {name!r} has a malformed restartCount")
            total += count
        return total

    @staticmethod
    def _parse_start_time(name: str, timestamp: Any) -> datetime | None:
        if timestamp is None:
            return None
        if isinstance(timestamp, str):
            with suppress(ValueError):
                return datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        raise _fail(f"Pod {name!r} has a malformed startTime")


__all__ = ["PodParser"]
