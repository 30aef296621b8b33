"""
Label endpoints for API v1.

CRUD over labels.  ``GET /labels`` returns a JSON array, or one JSON
document per line when the client asks for ``application/x-ndjson``.
"""

import logging
from typing import AsyncIterator, List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import StreamingResponse

from bug_tracker_api.app.core.headers import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
)
from bug_tracker_api.app.core.security import get_current_user
from bug_tracker_api.app.domain.entities import Label
from bug_tracker_api.app.schemas.label import LabelPatch, LabelRead, LabelWrite
from bug_tracker_api.app.services.label_service import ENTITY_NAME, LabelService

logger = logging.getLogger(__name__)

router = APIRouter()

NDJSON = "application/x-ndjson"


@router.post("", response_model=LabelRead, status_code=status.HTTP_201_CREATED)
async def create_label(
    label_in: LabelWrite,
    request: Request,
    response: Response,
    current_user: dict = Depends(get_current_user),
) -> LabelRead:
    """Create a new label; HTTP 400 if the body already has an ``id``."""
    logger.debug("REST request to save Label : %s", label_in)
    label = await LabelService.create_label(label_in)
    response.headers["Location"] = f"{request.url.path}/{label.id}"
    response.headers.update(create_entity_creation_alert(ENTITY_NAME, label.id))
    return LabelService.to_read(label)


@router.put("/{label_id}", response_model=LabelRead)
async def update_label(
    label_id: str,
    label_in: LabelWrite,
    response: Response,
    current_user: dict = Depends(get_current_user),
) -> LabelRead:
    """Replace an existing label, including the set of tickets carrying it."""
    logger.debug("REST request to update Label : %s, %s", label_id, label_in)
    label = await LabelService.update_label(label_id, label_in)
    response.headers.update(create_entity_update_alert(ENTITY_NAME, label.id))
    return LabelService.to_read(label)


@router.patch("/{label_id}", response_model=LabelRead)
async def partial_update_label(
    label_id: str,
    label_in: LabelPatch,
    response: Response,
    current_user: dict = Depends(get_current_user),
) -> LabelRead:
    """Partially update a label; an absent or ``null`` value is ignored."""
    logger.debug("REST request to partial update Label partially : %s, %s", label_id, label_in)
    label = await LabelService.partial_update_label(label_id, label_in)
    response.headers.update(create_entity_update_alert(ENTITY_NAME, label.id))
    return LabelService.to_read(label)


@router.get("", response_model=List[LabelRead])
async def list_labels(request: Request, current_user: dict = Depends(get_current_user)):
    """Return all labels, streamed as NDJSON if requested via ``Accept``."""
    logger.debug("REST request to get all Labels")
    labels = await LabelService.list_labels()
    if NDJSON in request.headers.get("accept", ""):
        return StreamingResponse(_as_ndjson(labels), media_type=NDJSON)
    return [LabelService.to_read(label) for label in labels]


async def _as_ndjson(labels: List[Label]) -> AsyncIterator[str]:
    for label in labels:
        yield LabelService.to_read(label).model_dump_json() + "\n"


@router.get("/{label_id}", response_model=LabelRead)
async def get_label(label_id: str, current_user: dict = Depends(get_current_user)) -> LabelRead:
    """Retrieve a label with its tickets; 404 if absent."""
    logger.debug("REST request to get Label : %s", label_id)
    label = await LabelService.get_label(label_id)
    if label is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Label not found")
    return LabelService.to_read(label)


@router.delete("/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_label(label_id: str, current_user: dict = Depends(get_current_user)) -> Response:
    """Delete a label; tickets carrying it lose the association."""
    logger.debug("REST request to delete Label : %s", label_id)
    await LabelService.delete_label(label_id)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=create_entity_deletion_alert(ENTITY_NAME, label_id),
    )
