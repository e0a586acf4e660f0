"""Kubeconfig context projection model."""

from pydantic import BaseModel, ConfigDict

from podpilot.constants.defaults import NAMESPACE_FALLBACK


class ContextInfo(BaseModel):
    """The active kubeconfig context."""

    model_config = ConfigDict(frozen=True)

    name: str
    cluster: str
    namespace: str = NAMESPACE_FALLBACK
