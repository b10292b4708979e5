# gymdesk/application/dtos/base_dto.py

"""
Base class for the application's DTOs.

``CustomBaseModel`` extends pydantic's ``BaseModel`` with the string
normalisation and serialisation helpers shared by every request schema.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


def blank_to_none(value: Any) -> Any:
    """Trim strings; an empty or whitespace-only string becomes None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class CustomBaseModel(BaseModel):
    """
    Base model for all request DTOs.

    Unknown fields are rejected so that immutable columns cannot be smuggled
    into an update.
    """

    model_config = ConfigDict(extra="forbid")

    def to_dict(self, exclude_unset: bool = False) -> Dict[str, Any]:
        """
        Dump the model, omitting fields whose value is None.

        Args:
            exclude_unset: Also omit fields the caller did not send

        Returns:
            Dict[str, Any]: Column values ready for a repository
        """
        data = self.model_dump(exclude_unset=exclude_unset)
        return {k: v for k, v in data.items() if v is not None}
