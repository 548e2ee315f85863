"""Rule engine endpoints for the web UI: field metadata, preview, materialize."""

import logging
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, HTTPException

from reelrules.helpers.exceptions import UnknownEntityKindError
from reelrules.helpers.logging_helper import clear_log_context, sanitize_exception_message, set_log_context
from reelrules.interfaces.api.types.rules_types import (
    EntityKindsResponse,
    FieldListResponse,
    MaterializeRequest,
    MaterializeResponse,
    NormalizeRequest,
    NormalizeResponse,
    PreviewRequest,
    PreviewResponse,
    ValidateRequest,
    ValidateResponse,
)
from reelrules.interfaces.api.web.dependencies import get_selection_service

if TYPE_CHECKING:
    from reelrules.services.domain.selection_svc import SelectionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rules", tags=["Rules"])


def _unknown_kind(e: UnknownEntityKindError) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Unknown entity kind: {e.kind}")


@router.get("/kinds")
async def web_rules_kinds(
    selection_service: Annotated["SelectionService", Depends(get_selection_service)],
) -> EntityKindsResponse:
    """List the entity kinds rules can target."""
    return EntityKindsResponse(kinds=list(selection_service.entity_kinds()))


@router.get("/{kind}/fields")
async def web_rules_fields(
    kind: str,
    selection_service: Annotated["SelectionService", Depends(get_selection_service)],
) -> FieldListResponse:
    """Fields and legal operators for the rule builder."""
    try:
        return FieldListResponse.from_dto(kind, selection_service.describe_fields(kind))
    except UnknownEntityKindError as e:
        raise _unknown_kind(e) from None


@router.post("/{kind}/preview")
async def web_rules_preview(
    kind: str,
    request: PreviewRequest,
    selection_service: Annotated["SelectionService", Depends(get_selection_service)],
) -> PreviewResponse:
    """Preview what a rule selects. Malformed rules preview as zero matches."""
    set_log_context(kind=kind, op="preview")
    try:
        result_dto = selection_service.preview(
            kind,
            request.raw_rule(),
            limit=request.limit,
            sort=request.sort.to_dto() if request.sort else None,
        )
        return PreviewResponse.from_dto(result_dto)
    except UnknownEntityKindError as e:
        raise _unknown_kind(e) from None
    except Exception as e:
        logger.exception("[Web API] Error previewing rule")
        raise HTTPException(status_code=500, detail=sanitize_exception_message(e, "Failed to preview rule")) from e
    finally:
        clear_log_context()


@router.post("/{kind}/materialize")
async def web_rules_materialize(
    kind: str,
    request: MaterializeRequest,
    selection_service: Annotated["SelectionService", Depends(get_selection_service)],
) -> MaterializeResponse:
    """Resolve a rule to the member IDs the caller should persist."""
    set_log_context(kind=kind, op="materialize")
    try:
        result_dto = selection_service.materialize(
            kind,
            request.raw_rule(),
            manual_ids=request.manual_ids,
            sort=request.sort.to_dto() if request.sort else None,
        )
        return MaterializeResponse.from_dto(result_dto)
    except UnknownEntityKindError as e:
        raise _unknown_kind(e) from None
    except Exception as e:
        logger.exception("[Web API] Error materializing rule")
        raise HTTPException(status_code=500, detail=sanitize_exception_message(e, "Failed to materialize rule")) from e
    finally:
        clear_log_context()


@router.post("/{kind}/validate")
async def web_rules_validate(
    kind: str,
    request: ValidateRequest,
    selection_service: Annotated["SelectionService", Depends(get_selection_service)],
) -> ValidateResponse:
    """Report unknown fields, illegal operators and bad values in a rule."""
    try:
        return ValidateResponse.from_dto(selection_service.validate(kind, request.raw_rule()))
    except UnknownEntityKindError as e:
        raise _unknown_kind(e) from None


@router.post("/normalize")
async def web_rules_normalize(
    request: NormalizeRequest,
    selection_service: Annotated["SelectionService", Depends(get_selection_service)],
) -> NormalizeResponse:
    """Re-serialize a rule the way it should be stored (blank rows dropped)."""
    return NormalizeResponse(rule=selection_service.normalize(request.raw_rule(), shape=request.shape))
