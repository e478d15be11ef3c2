"""Response models"""

from typing import Any, Optional, Self

from pydantic import BaseModel, ConfigDict, Field

from legalmoves.chess.serializer import OutputRecord


# --- RESPONSE MODELS ---
class MoveResponse(BaseModel):
    """One legal move. Dumped with `by_alias=True`, the keys read: type, role, from, capture, to, promotion."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: str
    role: str
    from_square: str = Field(alias="from")
    capture: Optional[str]
    to: str
    promotion: Optional[str]

    @classmethod
    def from_record(cls, record: OutputRecord) -> Self:
        return cls(
            type=record.kind,
            role=record.role,
            from_square=record.from_square,
            capture=record.capture,
            to=record.to_square,
            promotion=record.promotion,
        )

    def to_json(self, include_type: bool = True) -> dict[str, Any]:
        """The `type` discriminator is a versioned part of the schema, it can be left out."""
        exclude = None if include_type else {"type"}
        return self.model_dump(by_alias=True, exclude=exclude)
