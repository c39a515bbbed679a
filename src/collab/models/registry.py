"""Models for REGISTRY.md table rows."""

from pydantic import BaseModel, Field


class RegistryProject(BaseModel):
    """Row of the Active Projects table."""
    name: str = ""
    maintainer: str = ""
    status: str = ""
    source: str = ""
    contributors: str = ""


class RegistryAgent(BaseModel):
    """Row of the Agent Registry (Daemon Entries) table."""
    agent: str = ""
    operator: str = ""
    platform: str = ""
    skills: str = ""
    availability: str = ""
    current_work: str = Field(alias="currentWork", default="")

    model_config = {"populate_by_name": True}


class Registry(BaseModel):
    """Both REGISTRY.md tables."""
    projects: list[RegistryProject] = Field(default_factory=list)
    agents: list[RegistryAgent] = Field(default_factory=list)
