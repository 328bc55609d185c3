"""Base Pydantic model for FUTDash object serialization and deserialization."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FutdashModel(BaseModel):
    """
    Base for all FUTDash models. Upstream payloads are camelCase,
    Python attributes are snake_case; both are accepted on input.
    """

    def to_json(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys the upstream services use."""
        return self.model_dump(by_alias=True, mode="json")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        use_enum_values=False,
        validate_default=False,
        revalidate_instances="never",
        from_attributes=True,
    )
