"""
Stripe Event 모델 (검증 이후에만 생성, 불변).

data.object 는 벤더가 정의한 느슨한 구조라 `object` 필드를 discriminator로 쓰는
tagged union으로 받는다. 알 수 없는 타입은 UnknownObject로 떨어지고 원본 필드는
extra로 그대로 남는다.
"""

from __future__ import annotations

import math
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Tag, field_validator


class CustomerDetails(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    email: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _str_or_none(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None


class StripeObject(BaseModel):
    """
    모든 variant가 공유하는 "probe 대상" 필드.
    값의 타입이 예상과 다르면 에러 대신 None으로 떨어뜨린다 (formatter는 실패하면 안 됨).
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    # Stripe Dashboard 경로 세그먼트. None이면 event 상세 페이지로 fallback.
    dashboard_path: ClassVar[Optional[str]] = None

    object: Optional[str] = None
    id: Optional[str] = None

    amount: Optional[int] = None
    amount_total: Optional[int] = None
    amount_due: Optional[int] = None
    amount_paid: Optional[int] = None
    currency: Optional[str] = None
    currency_code: Optional[str] = None

    customer_email: Optional[str] = None
    receipt_email: Optional[str] = None
    email: Optional[str] = None
    customer_details: Optional[CustomerDetails] = None

    @field_validator("amount", "amount_total", "amount_due", "amount_paid", mode="before")
    @classmethod
    def _int_or_none(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        # 1e400 (inf), NaN, 12.5 같은 값은 minor unit 정수가 아니므로 없는 값 취급
        if isinstance(value, float) and math.isfinite(value) and value.is_integer():
            return int(value)
        return None

    @field_validator(
        "object", "id", "currency", "currency_code", "customer_email", "receipt_email", "email",
        mode="before",
    )
    @classmethod
    def _str_or_none(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None

    @field_validator("customer_details", mode="before")
    @classmethod
    def _mapping_or_none(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None


class PaymentIntentObject(StripeObject):
    dashboard_path: ClassVar[Optional[str]] = "payments"
    object: Literal["payment_intent"] = "payment_intent"


class ChargeObject(StripeObject):
    dashboard_path: ClassVar[Optional[str]] = "payments"
    object: Literal["charge"] = "charge"


class InvoiceObject(StripeObject):
    dashboard_path: ClassVar[Optional[str]] = "invoices"
    object: Literal["invoice"] = "invoice"


class CustomerObject(StripeObject):
    dashboard_path: ClassVar[Optional[str]] = "customers"
    object: Literal["customer"] = "customer"


class SubscriptionObject(StripeObject):
    dashboard_path: ClassVar[Optional[str]] = "subscriptions"
    object: Literal["subscription"] = "subscription"


class CheckoutSessionObject(StripeObject):
    dashboard_path: ClassVar[Optional[str]] = "checkouts/sessions"
    object: Literal["checkout.session"] = "checkout.session"


class UnknownObject(StripeObject):
    pass


_VARIANTS: dict[str, type[StripeObject]] = {
    "payment_intent": PaymentIntentObject,
    "charge": ChargeObject,
    "invoice": InvoiceObject,
    "customer": CustomerObject,
    "subscription": SubscriptionObject,
    "checkout.session": CheckoutSessionObject,
}

_UNKNOWN_TAG = "unknown"


def _object_tag(value: Any) -> str:
    if isinstance(value, dict):
        tag = value.get("object")
    else:
        tag = getattr(value, "object", None)
    # list / dict 같은 unhashable 값도 unknown으로 보낸다
    return tag if isinstance(tag, str) and tag in _VARIANTS else _UNKNOWN_TAG


DataObject = Annotated[
    Union[
        Annotated[PaymentIntentObject, Tag("payment_intent")],
        Annotated[ChargeObject, Tag("charge")],
        Annotated[InvoiceObject, Tag("invoice")],
        Annotated[CustomerObject, Tag("customer")],
        Annotated[SubscriptionObject, Tag("subscription")],
        Annotated[CheckoutSessionObject, Tag("checkout.session")],
        Annotated[UnknownObject, Tag(_UNKNOWN_TAG)],
    ],
    Discriminator(_object_tag),
]


class EventData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    object: DataObject


class Event(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    type: str
    livemode: bool
    created: Optional[int] = None
    data: EventData

    @property
    def data_object(self) -> StripeObject:
        return self.data.object

