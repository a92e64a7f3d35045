from typing import ClassVar, FrozenSet, Optional
from pydantic import BaseModel, Field, constr
from app.schemas.books import PatchRequest

Comment = constr(strip_whitespace=True, max_length=2000)


class CreateReviewRequest(BaseModel):
    book_id: int
    rating: int = Field(ge=1, le=5)
    comment: Optional[Comment] = None


class UpdateReviewRequest(PatchRequest):
    NON_NULLABLE: ClassVar[FrozenSet[str]] = frozenset({"rating"})

    rating: Optional[int] = Field(default=None, ge=1, le=5)
    comment: Optional[Comment] = None
