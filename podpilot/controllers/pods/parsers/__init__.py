"""Parsers for pods and kubeconfig data."""

from podpilot.controllers.pods.parsers.context_parser import ContextParser
from podpilot.controllers.pods.parsers.pod_parser import PodParser

__all__ = ["ContextParser", "PodParser"]
