from datetime import datetime, timezone
from typing import ClassVar, FrozenSet, Optional
from pydantic import BaseModel, Field, condecimal, constr, field_validator, model_validator

Price = condecimal(gt=0, max_digits=10, decimal_places=2)
Title = constr(strip_whitespace=True, min_length=1, max_length=255)
CoverUrl = constr(strip_whitespace=True, pattern=r"^https?://\S+$", max_length=500)


def _check_year(v):
    current = datetime.now(timezone.utc).year
    if v is not None and not (1000 <= v <= current):
        raise ValueError(f"publication_year must be between 1000 and {current}")
    return v


class PatchRequest(BaseModel):
    """Partial update.

    Only the fields the client actually sent are applied: a field that is
    omitted keeps its stored value, a field sent as ``null`` clears it. Fields
    listed in ``NON_NULLABLE`` may be omitted but never set to ``null``.
    """

    NON_NULLABLE: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_for_required(self):
        for name in sorted(self.model_fields_set & self.NON_NULLABLE):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def patch(self) -> dict:
        return self.model_dump(exclude_unset=True)


class CreateBookRequest(BaseModel):
    title: Title
    author: Title
    isbn: Optional[constr(strip_whitespace=True, max_length=20)] = None
    description: Optional[str] = None
    price: Price
    stock_quantity: int = Field(ge=0)
    category: constr(strip_whitespace=True, min_length=1, max_length=100)
    publication_year: Optional[int] = None
    publisher: Optional[constr(strip_whitespace=True, max_length=255)] = None
    cover_image_url: Optional[CoverUrl] = None

    @field_validator("publication_year")
    @classmethod
    def _valid_year(cls, v):
        return _check_year(v)


class UpdateBookRequest(PatchRequest):
    NON_NULLABLE: ClassVar[FrozenSet[str]] = frozenset(
        {"title", "author", "price", "stock_quantity", "category"}
    )

    title: Optional[Title] = None
    author: Optional[Title] = None
    isbn: Optional[constr(strip_whitespace=True, max_length=20)] = None
    description: Optional[str] = None
    price: Optional[Price] = None
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    category: Optional[constr(strip_whitespace=True, min_length=1, max_length=100)] = None
    publication_year: Optional[int] = None
    publisher: Optional[constr(strip_whitespace=True, max_length=255)] = None
    cover_image_url: Optional[CoverUrl] = None

    @field_validator("publication_year")
    @classmethod
    def _valid_year(cls, v):
        return _check_year(v)


class BookSearchParams(BaseModel):
    query: Optional[str] = None
    category: Optional[str] = None
    author: Optional[str] = None
    min_price: Optional[condecimal(ge=0)] = None
    max_price: Optional[condecimal(ge=0)] = None
    limit: int = Field(default=20, ge=1)
    offset: int = Field(default=0, ge=0)

    def filters(self) -> dict:
        return self.model_dump()


__all__ = [
    "PatchRequest",
    "CreateBookRequest",
    "UpdateBookRequest",
    "BookSearchParams",
]
