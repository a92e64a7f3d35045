from pydantic import BaseModel, constr

MIN_ADDRESS_LENGTH = 10


class PlaceOrderRequest(BaseModel):
    shipping_address: constr(strip_whitespace=True, min_length=MIN_ADDRESS_LENGTH, max_length=1000)
