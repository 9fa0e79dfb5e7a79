"""Contacts API

Request bodies are validated against the ``contact`` schema before they
reach the database: creation uses the raising validator, partial updates
validate in edit mode and report through a future, then the merged
contact is validated again as a whole before it is stored.
"""
import asyncio
import copy
from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db, fetch_one, create_entity, update_entity
from core.errors import raise_result, raise_error, not_found
from core.logging import api_logger
from core.validation import merge
from models.document import Document
from schemas.contacts import CONTACT, contact_validator, contact_updates
from api.json_body import read_json_object

router = APIRouter()

log = api_logger()


async def _load_contact(db: AsyncSession, contact_id: str) -> Document:
    result = await fetch_one(db, Document, contact_id, entity_name="Contact")
    raise_result(result)
    document = result.unwrap()
    if document.collection != CONTACT:
        raise_error(not_found("Contact", contact_id, origin="contacts").error)
    return document


@router.post("", status_code=201)
async def create_contact(request: Request, db: AsyncSession = Depends(get_db)) -> dict[str, Any]:
    """Validate and store a new contact."""
    payload = await read_json_object(request)

    async def store(contact: dict[str, Any]) -> Document:
        result = await create_entity(db, Document(collection=CONTACT, body=contact))
        raise_result(result)
        return result.unwrap()

    document = await contact_validator(payload, store)
    log.info("contact_created", contact_id=document.id)
    return document.to_dict()


@router.get("/{contact_id}")
async def get_contact(contact_id: str, db: AsyncSession = Depends(get_db)) -> dict[str, Any]:
    document = await _load_contact(db, contact_id)
    return document.to_dict()


@router.patch("/{contact_id}")
async def update_contact(
    contact_id: str, request: Request, db: AsyncSession = Depends(get_db)
) -> dict[str, Any]:
    """Apply a partial update; absent required fields are allowed."""
    payload = await read_json_object(request)
    document = await _load_contact(db, contact_id)

    outcome: asyncio.Future = asyncio.get_running_loop().create_future()
    contact_updates(payload, outcome, outcome.set_result, edit=True)
    changes = await outcome  # raises ValidationError on failure

    # Nested objects merge key by key; the result must satisfy the full schema
    merged = merge(copy.deepcopy(document.body), changes, contact_validator.schema)
    contact_validator(merged)
    document.body = merged
    result = await update_entity(db, document)
    raise_result(result)
    log.info("contact_updated", contact_id=contact_id, fields=sorted(changes))
    return result.unwrap().to_dict()
