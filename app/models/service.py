"""Backend services that can be enabled per tenant."""

from app.models.base import BaseRecord, WireModel


class Service(BaseRecord):
    code: str
    name: str
    description: str | None = None
    dependencies: list[str] | None = None


class ApplyServiceRequest(WireModel):
    tenant_code: str
    service_code: str


class AppliedService(WireModel):
    code: str
    name: str


class ApplyServiceResponse(WireModel):
    message: str
    applied_services: list[AppliedService] = []


class EnabledService(WireModel):
    id: str | None = None
    code: str
    name: str
    description: str | None = None
    status: str | None = None
    enabled_at: str | None = None
