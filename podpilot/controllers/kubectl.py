"""Kubectl argument shaping for the commands PodPilot issues."""

from __future__ import annotations


class KubectlCommands:
    """Builds kubectl argument tuples scoped to a context and namespace.

    Global flags come first so every command shares the same scope.
    """

    def __init__(self, context: str | None = None, namespace: str | None = None) -> None:
        self.context = context
        self.namespace = namespace

    def _scope_args(self, *, namespaced: bool = True) -> list[str]:
        args: list[str] = []
        if self.context:
            args.extend(["--context", self.context])
        if namespaced and self.namespace:
            args.extend(["--namespace", self.namespace])
        return args

    def get_pods(self) -> tuple[str, ...]:
        return (*self._scope_args(), "get", "pods", "-o", "json")

    def config_view(self) -> tuple[str, ...]:
        """Kubeconfig query; never namespaced.

        With an explicit context the view is minified, which makes kubectl
        report that context as ``current-context``.
        """
        args = [*self._scope_args(namespaced=False), "config", "view"]
        if self.context:
            args.append("--minify")
        return (*args, "-o", "json")

    def delete_pod(self, name: str) -> tuple[str, ...]:
        return (*self._scope_args(), "delete", "pod", name, "--wait=false", "-o", "name")

    def describe_pod(self, name: str) -> tuple[str, ...]:
        return (*self._scope_args(), "describe", "pod", name)

    def pod_logs(
        self,
        name: str,
        *,
        tail: int | None = None,
        container: str | None = None,
    ) -> tuple[str, ...]:
        args = [*self._scope_args(), "logs", name]
        if container:
            args.extend(["--container", container])
        if tail is not None:
            args.append(f"--tail={tail}")
        return tuple(args)


__all__ = ["KubectlCommands"]
