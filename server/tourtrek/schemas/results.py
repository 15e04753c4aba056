"""Write results returned to clients in the MongoDB driver's camelCase shape."""

from typing import Any, Optional

from pydantic import BaseModel, Field


def _str_or_none(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class InsertResult(BaseModel):
    """Outcome of an insert_one call."""

    acknowledged: bool = Field(..., description="Whether the write was acknowledged")
    inserted_id: Optional[str] = Field(None, serialization_alias="insertedId", description="Generated document id")

    @classmethod
    def from_pymongo(cls, result: Any) -> "InsertResult":
        return cls(acknowledged=result.acknowledged, inserted_id=_str_or_none(result.inserted_id))


class UpdateResult(BaseModel):
    """Outcome of an update_one call."""

    acknowledged: bool
    matched_count: int = Field(..., serialization_alias="matchedCount")
    modified_count: int = Field(..., serialization_alias="modifiedCount")
    upserted_id: Optional[str] = Field(None, serialization_alias="upsertedId")
    upserted_count: int = Field(0, serialization_alias="upsertedCount")

    @classmethod
    def from_pymongo(cls, result: Any) -> "UpdateResult":
        upserted_id = _str_or_none(result.upserted_id)
        return cls(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=upserted_id,
            upserted_count=0 if upserted_id is None else 1,
        )


class DeleteResult(BaseModel):
    """Outcome of a delete_one call."""

    acknowledged: bool
    deleted_count: int = Field(..., serialization_alias="deletedCount")

    @classmethod
    def from_pymongo(cls, result: Any) -> "DeleteResult":
        return cls(acknowledged=result.acknowledged, deleted_count=result.deleted_count)
