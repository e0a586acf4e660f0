"""Pod projection model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PodInfo(BaseModel):
    """Read-only projection of one pod from the pods snapshot."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str | None = None
    phase: str
    state: str
    image: str | None = None
    host_ip: str | None = None
    pod_ip: str | None = None
    start_time: datetime | None = None
    restart_count: int = 0
    ready_containers: int = 0
    total_containers: int = 0

    @property
    def ready(self) -> str:
        """Ready column text, e.g. ``1/2``."""
        return f"{self.ready_containers}/{self.total_containers}"
