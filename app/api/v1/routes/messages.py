from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from infrastructure.logging import get_module_logger
from infrastructure.services import NorthMessagesServiceDep, PayloadServiceDep
from modules.messages.models import (
    AuditMessage,
    NorthMessageByInterval,
    NorthMessageByUserInterval,
    NorthMessageByUserSubjectInterval,
    Page,
    Payload,
)

router = APIRouter(tags=["Messages"])
logger = get_module_logger()


class SavedMessage(BaseModel):
    payload_id: str


FromTime = Annotated[
    datetime, Query(alias="from", description="Start of the range (inclusive)")
]
ToTime = Annotated[datetime, Query(alias="to", description="End of the range (inclusive)")]
PageContext = Annotated[
    Optional[str], Query(alias="page", description="page_context of the previous page")
]
FetchSize = Annotated[
    Optional[int], Query(alias="size", ge=1, description="Maximum rows in the page")
]


@router.post("/messages", status_code=201, response_model=SavedMessage)
def save_message(message: AuditMessage, service: NorthMessagesServiceDep):
    """Store an audit message in every lookup table."""
    return SavedMessage(payload_id=service.save(message))


@router.get("/messages", response_model=Page[NorthMessageByInterval])
def get_messages_by_interval(
    service: NorthMessagesServiceDep,
    from_time: FromTime,
    to_time: ToTime,
    page: PageContext = None,
    size: FetchSize = None,
):
    return service.get_messages_by_interval(from_time, to_time, page, size)


@router.get("/messages/users/{user}", response_model=Page[NorthMessageByUserInterval])
def get_messages_by_user_interval(
    user: str,
    service: NorthMessagesServiceDep,
    from_time: FromTime,
    to_time: ToTime,
    page: PageContext = None,
    size: FetchSize = None,
):
    return service.get_messages_by_user_interval(user, from_time, to_time, page, size)


@router.get(
    "/messages/users/{user}/subjects/{subject}",
    response_model=Page[NorthMessageByUserSubjectInterval],
)
def get_messages_by_user_subject_interval(
    user: str,
    subject: str,
    service: NorthMessagesServiceDep,
    from_time: FromTime,
    to_time: ToTime,
    page: PageContext = None,
    size: FetchSize = None,
):
    return service.get_messages_by_user_subject_interval(
        user, subject, from_time, to_time, page, size
    )


@router.get("/payloads/{payload_id}", response_model=Payload)
def get_payload(payload_id: str, payloads: PayloadServiceDep):
    payload = payloads.get_message_payload(payload_id)
    if payload is None:
        logger.info("payload_not_found", payload_id=payload_id)
        raise HTTPException(status_code=404, detail="payload not found")
    return payload
