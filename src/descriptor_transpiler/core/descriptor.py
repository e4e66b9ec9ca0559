"""
Application descriptor model.

An AppDescriptor is the validated in-memory form of app.yaml. It is
frozen once validated and exposes the derived views the chart and
terraform pipelines consume.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ValidationError
from .sizes import VALID_SIZES, SizeTier

LABEL_PREFIX = "app.kubernetes.io"
COMPONENT_LABEL = "web"

DATABASE_DEPENDENCY = "database"
DATABASE_TYPE = "postgres"
DEFAULT_DATABASE_SIZE = SizeTier.SMALL.value
DEFAULT_DATABASE_VERSION = 17


class DatabaseRequest(NamedTuple):
    """Database size and version requested by a descriptor."""

    size_tier: str
    version: int


class DependencySpec(BaseModel):
    """
    An attached dependency declared under ``dependencies``.

    Attributes:
        type: Dependency kind (e.g. "postgres")
        size: Optional size tier; consumers apply their own default
        version: Optional major version; consumers apply their own default
        config: Free-form settings, carried through but not used for generation
    """

    type: str = ""
    size: str | None = None
    version: int | None = None
    config: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("config", mode="before")
    @classmethod
    def _none_config_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class AppDescriptor(BaseModel):
    """
    Application descriptor.

    Attributes:
        api_version: Descriptor schema version (``apiVersion`` in YAML)
        name: Application name
        tribe: Owning tribe
        team: Owning team
        type: Application type classifier
        public: Whether the application is publicly exposed
        size: Size tier, normalized to "tiny" when empty
        dependencies: Attached dependencies keyed by name
        components: Extra components, carried through unchanged
    """

    api_version: str = Field(default="", alias="apiVersion")
    name: str
    tribe: str = ""
    team: str = ""
    type: str = ""
    public: bool = False
    size: str = SizeTier.TINY.value
    dependencies: dict[str, DependencySpec] = Field(default_factory=dict)
    components: list[Any] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name cannot be empty")
        return value

    @field_validator("size", mode="before")
    @classmethod
    def _normalize_size(cls, value: Any) -> Any:
        if value is None or value == "":
            return SizeTier.TINY.value
        if isinstance(value, str) and value not in VALID_SIZES:
            raise ValueError(f"invalid size '{value}': must be one of: {', '.join(VALID_SIZES)}")
        return value

    @field_validator("dependencies", mode="before")
    @classmethod
    def _none_dependencies_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("components", mode="before")
    @classmethod
    def _none_components_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_size_tier(self) -> SizeTier:
        """Convert the validated size string to a SizeTier."""
        return SizeTier(self.size)

    def build_labels(self) -> dict[str, str]:
        """Build the Kubernetes recommended labels for this application."""
        return {
            f"{LABEL_PREFIX}/name": self.name,
            f"{LABEL_PREFIX}/team": self.team,
            f"{LABEL_PREFIX}/tribe": self.tribe,
            f"{LABEL_PREFIX}/type": self.type,
            f"{LABEL_PREFIX}/component": COMPONENT_LABEL,
        }

    def get_dependency(self, name: str) -> DependencySpec:
        """
        Look up a dependency by name.

        Raises:
            ValidationError: If no dependency with that name is declared
        """
        try:
            return self.dependencies[name]
        except KeyError:
            raise ValidationError(f"dependency '{name}' not found") from None

    def has_database(self) -> bool:
        """Check for a postgres dependency named "database"."""
        dependency = self.dependencies.get(DATABASE_DEPENDENCY)
        return dependency is not None and dependency.type == DATABASE_TYPE

    def get_database_config(self) -> DatabaseRequest:
        """
        Get the requested database size and version, with defaults applied.

        Raises:
            ValidationError: If the descriptor has no postgres database dependency
        """
        if not self.has_database():
            raise ValidationError(
                f"no '{DATABASE_DEPENDENCY}' dependency of type '{DATABASE_TYPE}' configured"
            )
        dependency = self.dependencies[DATABASE_DEPENDENCY]
        return DatabaseRequest(
            size_tier=dependency.size or DEFAULT_DATABASE_SIZE,
            version=dependency.version if dependency.version is not None else DEFAULT_DATABASE_VERSION,
        )
