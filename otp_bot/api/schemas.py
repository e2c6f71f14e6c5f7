from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

TransportEventName = Literal["message", "ready", "disconnected", "auth_failure"]


class SendMessageRequest(BaseModel):
    phone: Optional[str] = None
    text: Optional[str] = None


class SendOtpRequest(BaseModel):
    phone: Optional[str] = None
    code: Optional[str] = None
    type: Optional[str] = None  # "reset" adds the password-reset label


class DispatchResponse(BaseModel):
    success: bool
    message: Optional[str] = None


class TransportEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event: TransportEventName
    sender: Optional[str] = Field(default=None, alias="from")
    body: str = ""
    id: Optional[str] = None
    reason: Optional[str] = None
    message: Optional[str] = None
