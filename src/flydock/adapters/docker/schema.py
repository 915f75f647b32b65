"""Pydantic models for the JSON the docker CLI prints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DockerBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DockerState(DockerBaseModel):
    status: str = Field(alias="Status")


class DockerInspectContainer(DockerBaseModel):
    id: str = Field(alias="Id")
    state: DockerState = Field(alias="State")


class DockerPsEntry(DockerBaseModel):
    id: str = Field(alias="ID")
    # Comma-separated when a container has several names.
    names: str = Field(alias="Names")
    image: str = Field(alias="Image")
    state: str = Field(alias="State")
    status: str = Field(alias="Status")
