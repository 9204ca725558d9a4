from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Result(BaseModel):
    """Frozen result shape serialized with camelCase keys for agent clients."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Diagnostic(_Result):
    file: str
    line: int
    message: str
    severity: Literal["error", "warning"]


class BuildResult(_Result):
    success: bool
    output_path: str
    errors: list[Diagnostic]
    warnings: list[Diagnostic]


class CreateResult(_Result):
    success: bool
    project_path: str
    template: str
    error: str | None = None


class RunResult(_Result):
    success: bool
    simulator_launched: bool
    error: str | None = None


class DeployResult(_Result):
    success: bool
    error: str | None = None


class DeviceInfo(_Result):
    connected: bool
    serial_number: str | None = None
    firmware_version: str | None = None
    error: str | None = None


class TemplateInfo(_Result):
    name: str
    description: str
    path: str


class ExampleInfo(_Result):
    name: str
    path: str
    has_built_pdx: bool
