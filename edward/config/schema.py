"""On-disk JSON schema for ``edward.json``.

Unknown keys are allowed at every level and survive a load/save round
trip untouched.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ServiceEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    path: str | None = None
    commands: dict[str, str] = Field(default_factory=dict)
    env: list[str] = Field(default_factory=list)


class GroupEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    aliases: list[str] = Field(default_factory=list)
    children: list[str] = Field(default_factory=list)
    env: list[str] = Field(default_factory=list)


class ConfigFile(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    version: str | None = Field(default=None, alias="edwardVersion")
    imports: list[str] = Field(default_factory=list)
    groups: list[GroupEntry] = Field(default_factory=list)
    services: list[ServiceEntry] = Field(default_factory=list)
