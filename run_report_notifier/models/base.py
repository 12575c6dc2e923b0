"""Base model configuration for wire-level documents."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable model that accepts either field names or wire aliases."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_wire(self) -> dict[str, object]:
        """Serialise using wire aliases into JSON-compatible values."""
        return self.model_dump(by_alias=True, mode="json")
