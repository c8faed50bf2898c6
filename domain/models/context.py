"""
Resolution context value object.

Produced by the runtime personalization layer (location awareness, user
profile) and consumed by the resolution engine. It is never stored.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from domain.models.execution_method import ExecutionLocation


class ResolutionContext(BaseModel):
    """
    Runtime context used to pick an execution method.

    Examples:
        >>> context = ResolutionContext(location="park", persona_tags=["parent"])
        >>> context.persona_tags
        ['parent']
    """

    location: Optional[Union[ExecutionLocation, str]] = Field(
        default=None, description="Where the user is training"
    )
    persona_tags: List[str] = Field(
        default_factory=list, description="Lifestyle tags of the user"
    )
    brand_id: Optional[str] = Field(
        default=None, description="Brand of the equipment in front of the user"
    )

    @property
    def location_value(self) -> Optional[str]:
        """Location as a plain string, whether given as enum or string."""
        if isinstance(self.location, ExecutionLocation):
            return self.location.value
        return self.location

    model_config = {"frozen": True}
