"""Pydantic models for the generator configuration."""

from pydantic import BaseModel, Field, field_validator, model_validator


class TypeSelector(BaseModel):
    """How a tagged type is discovered in a model module.

    Exactly one of ``keyword`` (the class name contains it) or
    ``decorator`` (the class carries a decorator of that name) is set.
    """

    keyword: str | None = None
    decorator: str | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_shorthand(cls, data):
        """Allow ``effect: Effect`` as shorthand for ``{keyword: Effect}``."""
        if isinstance(data, str):
            return {"keyword": data}
        return data

    @model_validator(mode="after")
    def exactly_one_rule(self) -> "TypeSelector":
        """Reject selectors with both or neither rule."""
        if (self.keyword is None) == (self.decorator is None):
            raise ValueError("set exactly one of 'keyword' or 'decorator'")
        return self

    def describe(self) -> str:
        """Human readable form used in diagnostics."""
        if self.keyword is not None:
            return f"name containing '{self.keyword}'"
        return f"decorator '@{self.decorator}'"


class Conventions(BaseModel):
    """Naming conventions shared between the generator and model modules."""

    domain_model_marker: str = "CqrsModel"
    handle_marker: str = "CqrsModelLock"
    lifecycle_marker: str = "Lifecycle"
    result_type: str = "Result"
    effect: TypeSelector = Field(default_factory=lambda: TypeSelector(keyword="Effect"))
    error: TypeSelector = Field(default_factory=lambda: TypeSelector(keyword="Error"))
    operation_prefixes: list[str] = Field(default_factory=lambda: ["command", "com", "query"])
    source_roots: list[str] = Field(default_factory=lambda: ["src", "tests"])

    @field_validator("source_roots")
    @classmethod
    def require_source_root(cls, value: list[str]) -> list[str]:
        """At least one source root is needed to derive import prefixes."""
        if not value:
            raise ValueError("at least one source root is required")
        return value


class RuntimeSettings(BaseModel):
    """Modules the generated code imports at runtime."""

    result_module: str = "result"


class GeneratorConfig(BaseModel):
    """Root model of a cqrsgen.yaml file."""

    lifecycle: str | None = None
    models: list[str] = Field(default_factory=list)
    output: str | None = None
    conventions: Conventions = Field(default_factory=Conventions)
    runtime: RuntimeSettings = Field(default_factory=RuntimeSettings)
    base_dir: str | None = Field(default=None, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def normalize_models(cls, data):
        """Normalize ``models`` to always be a list."""
        if isinstance(data, dict):
            models = data.get("models")
            if isinstance(models, str):
                data["models"] = [models]
        return data
