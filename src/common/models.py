"""
Pydantic models for inbound queries, payment records and upstream results.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResultQuery(BaseModel):
    """Roll/serial/registration triple identifying one board result."""

    roll: str = Field(description="6-digit roll fragment")
    serial: str = Field(description="4-digit serial fragment ('no' in requests)")
    registration: str = Field(description="Registration number, trimmed")

    model_config = ConfigDict(frozen=True)

    @property
    def full_roll(self) -> str:
        return f"{self.roll}{self.serial}"


class FullResultQuery(ResultQuery):
    identifier: str = Field(description="Payment ID, email or phone proving payment")


class PaymentRecord(BaseModel):
    """
    One entry from the payment store.

    Strict mode keeps matching string-only: a record whose roll or serial
    is stored as a number never matches a request.
    """

    roll: str
    serial: str = Field(alias="no")
    payment_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    model_config = ConfigDict(strict=True, extra="ignore", populate_by_name=True)

    @field_validator("payment_id", "email", "phone", mode="before")
    @classmethod
    def drop_non_string_identifiers(cls, v):
        """Non-string identifiers (e.g. numeric phones) can never equal a request value."""
        return v if isinstance(v, str) else None

    def matches(self, roll: str, serial: str, identifier: str) -> bool:
        """payment_id and email compare case-insensitively, phone exactly."""
        if self.roll != roll or self.serial != serial:
            return False

        normalized = identifier.lower()
        if self.payment_id and self.payment_id.lower() == normalized:
            return True
        if self.email and self.email.lower() == normalized:
            return True
        return bool(self.phone) and self.phone == identifier


class ExternalResultRecord(BaseModel):
    """Board result payload. Only the fields the details tier exposes are named; values pass through as sent."""

    name: Optional[Any] = None
    roll_no: Optional[Any] = Field(default=None, alias="ROll_No")
    reg_no: Optional[Any] = Field(default=None, alias="Reg_No")

    model_config = ConfigDict(extra="allow")


class DetailsResponse(BaseModel):
    name: Optional[Any] = None
    roll_no: Optional[Any] = Field(default=None, serialization_alias="rollNo")
    reg_no: Optional[Any] = Field(default=None, serialization_alias="regNo")
    payment_button_id: str = Field(serialization_alias="paymentButtonId")

    @classmethod
    def from_result(cls, record: ExternalResultRecord, payment_button_id: str) -> "DetailsResponse":
        return cls(
            name=record.name,
            roll_no=record.roll_no,
            reg_no=record.reg_no,
            payment_button_id=payment_button_id,
        )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
