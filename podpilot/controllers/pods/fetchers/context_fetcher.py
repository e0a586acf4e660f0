"""Context fetcher - the fetch operation for the kubeconfig context."""

from __future__ import annotations

from typing import Any

from podpilot.constants.enums import ResourceClass
from podpilot.controllers.kubectl import KubectlCommands
from podpilot.controllers.pods.parsers.context_parser import ContextParser
from podpilot.controllers.polling.poller import FetchOperation
from podpilot.utils.json_output import decode_json_output


class ContextFetcher:
    """Builds the kubeconfig query and validates its output."""

    def __init__(self, commands: KubectlCommands, parser: ContextParser | None = None) -> None:
        self._commands = commands
        self._parser = parser or ContextParser()

    def build_args(self) -> tuple[str, ...]:
        return self._commands.config_view()

    def parse_output(self, output: str) -> Any:
        data = decode_json_output(output, ResourceClass.CONTEXT)
        self._parser.parse_context(data)
        return data

    def as_operation(self) -> FetchOperation:
        return FetchOperation(build_args=self.build_args, parse=self.parse_output)
