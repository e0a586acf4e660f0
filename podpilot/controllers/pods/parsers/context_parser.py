"""Context parser - projects ``kubectl config view -o json`` into ContextInfo."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from podpilot.constants.defaults import NAMESPACE_FALLBACK
from podpilot.constants.enums import ResourceClass
from podpilot.errors import ParseFailure
from podpilot.models.core.context_info import ContextInfo


class ContextParser:
    """Parses kubeconfig views into the active context."""

    def parse_context(self, config: Any) -> ContextInfo:
        """Resolve the current context entry.

        Raises:
            ParseFailure: No current context, or it is not listed.
        """
        if not isinstance(config, Mapping):
            raise ParseFailure("Kubeconfig is not a JSON object", ResourceClass.CONTEXT)
        current = config.get("current-context")
        if not isinstance(current, str) or not current:
            raise ParseFailure("Kubeconfig has no current-context", ResourceClass.CONTEXT)

        contexts = config.get("contexts") or []
        if not isinstance(contexts, list):
            raise ParseFailure("Kubeconfig contexts is not a list", ResourceClass.CONTEXT)

        for entry in contexts:
            if not isinstance(entry, Mapping) or entry.get("name") != current:
                continue
            details = entry.get("context")
            if not isinstance(details, Mapping) or not isinstance(details.get("cluster"), str):
                raise ParseFailure(
                    f"Context {current!r} has no cluster", ResourceClass.CONTEXT
                )
            namespace = details.get("namespace")
            return ContextInfo(
                name=current,
                cluster=details["cluster"],
                namespace=namespace if isinstance(namespace, str) and namespace else NAMESPACE_FALLBACK,
            )

        raise ParseFailure(
            f"Current context {current!r} is not defined", ResourceClass.CONTEXT
        )


__all__ = ["ContextParser"]
