from pydantic import BaseModel, Field


class AddToCartRequest(BaseModel):
    book_id: int
    quantity: int = Field(default=1, gt=0)


class UpdateCartItemRequest(BaseModel):
    cart_item_id: int
    quantity: int = Field(gt=0)


class RemoveFromCartRequest(BaseModel):
    cart_item_id: int
