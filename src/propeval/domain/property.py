from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# Money figures are bounded so every derived ratio stays finite
MIN_AMOUNT = 0.01
MAX_AMOUNT = 1e12

# Living area bounds (square feet)
MIN_SQUARE_FEET = 1.0
MAX_SQUARE_FEET = 1e9

# Attribute names of every numeric input, in declaration order
NUMERIC_FIELDS = (
    "price",
    "monthly_rent",
    "monthly_expenses",
    "down_payment",
    "square_feet",
    "bedrooms",
    "bathrooms",
    "year_built",
)


class PropertyInput(BaseModel):
    """
    Caller-supplied property figures.

    Wire names are camelCase (monthlyRent, downPayment, ...); snake_case
    attribute names are accepted too.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        allow_inf_nan=False,
    )

    address: str = Field(..., description="Label, also drives the market segment heuristic")
    price: float = Field(..., ge=MIN_AMOUNT, le=MAX_AMOUNT, description="Purchase price")
    monthly_rent: float = Field(..., alias="monthlyRent", ge=MIN_AMOUNT, le=MAX_AMOUNT)
    monthly_expenses: float = Field(..., alias="monthlyExpenses", ge=0, le=MAX_AMOUNT)
    down_payment: float = Field(..., alias="downPayment", ge=MIN_AMOUNT, le=MAX_AMOUNT, description="Cash invested up front")

    square_feet: float | None = Field(None, alias="squareFeet", ge=MIN_SQUARE_FEET, le=MAX_SQUARE_FEET)
    bedrooms: float | None = Field(None, gt=0)
    bathrooms: float | None = Field(None, gt=0)
    year_built: int | None = Field(None, alias="yearBuilt", ge=1800)

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _reject_bool(cls, v: Any) -> Any:
        # bool is an int subclass; True would otherwise become 1.0
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        return v

    @field_validator("address")
    @classmethod
    def _address_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("address must not be blank")
        return v

    @field_validator("down_payment")
    @classmethod
    def _down_payment_within_price(cls, v: float, info: ValidationInfo) -> float:
        price = info.data.get("price")
        if price is not None and v > price:
            raise ValueError("downPayment cannot exceed price")
        return v

    @field_validator("year_built")
    @classmethod
    def _not_in_future(cls, v: int | None) -> int | None:
        if v is not None and v > date.today().year:
            raise ValueError("yearBuilt cannot be in the future")
        return v

    def to_dict(self) -> dict[str, Any]:
        # omitted optionals stay omitted on the way out
        out = self.model_dump(by_alias=True, exclude_none=True)
        # whole numbers go back out the way callers send them (350000, not 350000.0)
        return {k: int(v) if isinstance(v, float) and v.is_integer() else v for k, v in out.items()}
