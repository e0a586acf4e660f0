"""Pod fetcher - the fetch operation for the pods resource class."""

from __future__ import annotations

from typing import Any

from podpilot.constants.enums import ResourceClass
from podpilot.controllers.kubectl import KubectlCommands
from podpilot.controllers.pods.parsers.pod_parser import PodParser
from podpilot.controllers.polling.poller import FetchOperation
from podpilot.utils.json_output import decode_json_output


class PodFetcher:
    """Builds the pods query and validates its output."""

    def __init__(self, commands: KubectlCommands, parser: PodParser | None = None) -> None:
        """Initialize with the command builder.

        Args:
            commands: Kubectl argument builder holding context and namespace.
            parser: Pod parser used to validate the snapshot.
        """
        self._commands = commands
        self._parser = parser or PodParser()

    def build_args(self) -> tuple[str, ...]:
        return self._commands.get_pods()

    def parse_output(self, output: str) -> Any:
        """Decode and validate ``get pods`` output.

        Every pod is projected, so a snapshot the store would reject fails
        here as well.

        Raises:
            ParseFailure: Output is not a well-formed pod list.
        """
        data = decode_json_output(output, ResourceClass.PODS)
        self._parser.parse_pod_list(data)
        return data

    def as_operation(self) -> FetchOperation:
        return FetchOperation(build_args=self.build_args, parse=self.parse_output)
