"""
Request body schemas.

Bodies are validated with pydantic; a schema failure becomes a
`ValidationError` (HTTP 400) naming the first offending field. Field aliases
accept the camelCase keys the admin dashboard sends.
"""

from datetime import datetime, timezone
from typing import Annotated, Literal, Optional, Union

import pydantic
from flask import request
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool

from rp_portal.errors import ValidationError


def _naive_utc(value):
    # Stored timestamps are naive UTC
    if value is not None and value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


UtcDateTime = Annotated[datetime, AfterValidator(_naive_utc)]


class Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def changes(self):
        """Fields the caller actually sent, minus nulls."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


def parse_body(schema):
    """Validate the JSON body of the current request against `schema`."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(describe_error(exc)) from exc


def describe_error(exc):
    first = exc.errors()[0]
    field = '.'.join(str(part) for part in first.get('loc', ()))
    message = first.get('msg', 'Invalid value')
    return f'{field}: {message}' if field else message


# ---------------------------------------------------------------------------
# Admin authentication and accounts
# ---------------------------------------------------------------------------

class AdminLogin(Schema):
    username: str = ''
    password: str = ''


class AdminCreate(Schema):
    username: str = Field(min_length=1, max_length=80)
    password: str = Field(min_length=1)
    email: Optional[str] = None


class AdminStatusUpdate(Schema):
    admin_id: str = Field(alias='adminId', min_length=1)
    active: StrictBool


class AdminPasswordUpdate(Schema):
    admin_id: str = Field(alias='adminId', min_length=1)
    new_password: str = Field(alias='newPassword', default='')


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------

class UserUpdate(Schema):
    user_id: str = Field(alias='userId', min_length=1)
    activated: Optional[StrictBool] = None


class ActivationDecision(Schema):
    user_id: str = Field(alias='userId', min_length=1)
    reason: Optional[str] = None


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

class RuleCategoryCreate(Schema):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    icon: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    display_order: int = 0
    visible: bool = True


class RuleCategoryUpdate(Schema):
    name: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1)
    icon: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    display_order: Optional[int] = None
    visible: Optional[bool] = None


class RuleCreate(Schema):
    category_id: int
    title: str = Field(min_length=1)
    description: Optional[str] = None
    display_order: int = 0
    visible: bool = True


class RuleUpdate(Schema):
    category_id: Optional[int] = None
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    display_order: Optional[int] = None
    visible: Optional[bool] = None


class EventCreate(Schema):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[str] = None
    event_date: UtcDateTime


class EventUpdate(Schema):
    id: int
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[str] = None
    event_date: Optional[UtcDateTime] = None


class NewsArticleCreate(Schema):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    excerpt: Optional[str] = None
    image_url: Optional[str] = None
    author: Optional[str] = None
    published_at: Optional[UtcDateTime] = None


class StoreItemCreate(Schema):
    category: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Union[str, float, int]
    item_metadata: Optional[str] = Field(default=None, alias='metadata')
    image_url: Optional[str] = None
    available: bool = True
    popular: bool = False


class StoreItemUpdate(Schema):
    id: int
    category: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[Union[str, float, int]] = None
    item_metadata: Optional[str] = Field(default=None, alias='metadata')
    image_url: Optional[str] = None
    available: Optional[bool] = None
    popular: Optional[bool] = None


class ServerStatusUpdate(Schema):
    online: bool = True
    current_players: int = Field(default=0, ge=0)
    max_players: int = Field(default=200, ge=1)
    ping: int = Field(default=0, ge=0)
    uptime_seconds: Optional[int] = Field(default=None, ge=0)


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------

class PaymentDecision(Schema):
    action: Literal['approve', 'reject']
    payment_request_id: int = Field(alias='paymentRequestId')
    reason: Optional[str] = None
