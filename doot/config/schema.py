# Doot Configuration Schema
# Pydantic models for doot.yaml validation

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from doot.errors import ConfigurationError

SUPPORTED_VERSION = "v1"


class Mode(str, Enum):
    """How managed files are materialized at the destination."""

    FILE = "file"
    LINK = "link"


class DootConfig(BaseModel):
    """Root configuration model."""

    version: str = Field(description="Config format version, must be v1")
    mode: Mode = Field(default=Mode.FILE, description="Materialization mode: file or link")
    plans: dict[str, list[str] | None] = Field(
        default_factory=dict,
        description="Plan name -> member groups. A null list means all groups.",
    )
    groups: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        description="Group name -> resolver name -> target location",
    )

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, v):
        """Accept unquoted scalars such as `version: 1`."""
        return v if v is None else str(v)

    @field_validator("mode", mode="before")
    @classmethod
    def default_null_mode(cls, v):
        return Mode.FILE if v is None else v

    @field_validator("plans", "groups", mode="before")
    @classmethod
    def default_null_table(cls, v):
        """An empty `plans:` key loads as None."""
        return {} if v is None else v

    def get_group(self, name: str) -> dict[str, str]:
        """
        Get the resolver table of a group.

        Raises:
            ConfigurationError: If the group is not configured.
        """
        group = self.groups.get(name)
        if group is None:
            raise ConfigurationError(f"Group '{name}' not found")
        return group

    def get_resolver(self, group: str, resolver: str) -> str:
        """
        Get the unexpanded target location of a group for a resolver.

        Raises:
            ConfigurationError: If the group or the resolver is not configured.
        """
        resolvers = self.get_group(group)
        path = resolvers.get(resolver)
        if path is None:
            raise ConfigurationError(f"Resolver '{resolver}' not found in group '{group}'")
        return path

    def get_plan_groups(self, plan: str) -> list[str]:
        """
        Get the member groups of a plan.

        Returns:
            The explicit member list, or every configured group when the plan lists none.

        Raises:
            ConfigurationError: If the plan is not configured.
        """
        if plan not in self.plans:
            raise ConfigurationError(f"Plan '{plan}' not found")

        members = self.plans[plan]
        if members is None:
            return list(self.groups.keys())
        return list(members)
