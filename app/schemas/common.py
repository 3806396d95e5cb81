from pydantic import BaseModel, model_validator
from typing import ClassVar, FrozenSet, Generic, Optional, TypeVar

DataT = TypeVar("DataT")

class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope shared by the JSON API: ``{success, data, message}``."""
    success: bool = True
    data: Optional[DataT] = None
    message: Optional[str] = None

class MessageResponse(BaseModel):
    success: bool = True
    message: str

class PartialUpdate(BaseModel):
    """Body of a partial update: omitted fields are left alone, ``null`` only clears ``nullable_fields``."""
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def reject_nulls(self):
        nulls = sorted(
            name for name in self.model_fields_set
            if getattr(self, name) is None and name not in self.nullable_fields
        )
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self
