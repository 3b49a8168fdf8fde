"""Infrastructure catalog used for tenant placement."""

from pydantic import Field

from app.models.base import WireModel


class ClusterConfig(WireModel):
    id: str
    name: str = ""
    region: str
    capacity: float = Field(gt=0)
    current_load: float = 0
    frontend_url: str | None = None
    backend_url: str | None = None

    @property
    def load_ratio(self) -> float:
        return self.current_load / self.capacity


class RegionConfig(WireModel):
    id: str
    name: str = ""
    display_name: str = ""
    clusters: list[str] = []
    data_residency: bool = False


class InfrastructureConfig(WireModel):
    clusters: list[ClusterConfig]
    regions: list[RegionConfig] = []
    default_cluster: str = ""
    default_region: str = ""
