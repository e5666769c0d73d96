from pydantic import BaseModel, Field


class CardIn(BaseModel):
    # Format-checked only; the resource server has no payment gateway.
    cardNumber: str = Field(default="", repr=False)
    expiry: str = ""  # MM/YY
    cvv: str = Field(default="", repr=False)
