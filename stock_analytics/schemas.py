from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import parse_month_period


class RawProductRow(BaseModel):
    """A single product line exactly as recorded in a monthly snapshot."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    product_id: str = Field(..., alias="productId")
    product_name: str = Field(default="", alias="productName")
    stock_status: float = Field(default=0, ge=0, alias="stockStatus")

    @field_validator("product_id", mode="before")
    @classmethod
    def coerce_product_id(cls, v):
        # Exports frequently carry numeric ids
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(int(v)) if float(v).is_integer() else str(v)
        return v

    @field_validator("product_name", mode="before")
    @classmethod
    def blank_missing_name(cls, v):
        return "" if v is None else v


class Snapshot(BaseModel):
    """
    One tracked month. `name` is the month identifier; `period` is an optional,
    explicitly orderable timestamp for the same month.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    period: Optional[date] = None
    rows: list[RawProductRow] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v):
        return str(v) if isinstance(v, (int, float)) and not isinstance(v, bool) else v

    @field_validator("period", mode="before")
    @classmethod
    def accept_month_period(cls, v):
        if isinstance(v, str):
            return parse_month_period(v) or v
        return v

    @field_validator("rows", mode="before")
    @classmethod
    def rows_must_be_list(cls, v):
        # A missing or malformed row set degrades to an empty month.
        return v if isinstance(v, list) else []


class ConsolidatedProductRecord(BaseModel):
    """One product in one month, duplicate rows already summed."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    product_id: str = Field(..., alias="productId")
    product_name: str = Field(default="", alias="productName")
    stock_status: float = Field(default=0, alias="stockStatus")


class ProductAnalytics(BaseModel):
    """
    Defines the data contract for a single row of the final stock report.
    `stock_status` is the peak stock seen over the series, used as the initial stock.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    product_id: str = Field(..., alias="productId")
    product_name: str = Field(default="", alias="productName")
    stock_status: float = Field(default=0, alias="stockStatus")
    left_over: float = Field(default=0, alias="leftOver")
    availability: str = Field(..., alias="availability")
    average: float = Field(default=0, alias="average")
    total_sales: float = Field(default=0, alias="totalSales")
    months: int = Field(default=0, ge=0, alias="months")
    enough_for_months: float = Field(default=0, alias="enoughForMonths")
