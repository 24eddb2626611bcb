import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, Request, Security, UploadFile, status
from fastapi.security import HTTPAuthorizationCredentials

from solairdrop.csv_input import parse_recipients_csv
from solairdrop.errors import CsvFormatError
from solairdrop.service import AirdropService

from .auth import security
from .error import APIExceptionResponse, ValidationErrorResponse
from .schemas import (
    AirdropRequest,
    AirdropResponse,
    ErrorResponse,
    ValidationErrorsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["airdrop"])

ERROR_RESPONSES = {
    400: {"model": ValidationErrorsResponse, "description": "Invalid recipients"},
    401: {"model": ErrorResponse, "description": "Authentication required"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Configuration or airdrop failure"},
}


def get_service(request: Request) -> AirdropService:
    return request.app.state.service_provider()


def authenticated(
    request: Request, auth: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> dict:
    return request.app.state.auth.auth_wrapper(auth)


def _run_airdrop(service: AirdropService, recipients: Any):
    validation = service.validate_recipients(recipients)
    if validation.errors:
        logger.warning(f"Rejected airdrop request with {len(validation.errors)} invalid recipients")
        return ValidationErrorResponse(validation.errors)

    result = service.process_airdrop(validation.validated_recipients)
    return AirdropResponse.from_result(result)


@router.post(
    "/airdrop",
    response_model=AirdropResponse,
    response_model_exclude_none=True,
    summary="Airdrop to a JSON list of recipients",
    responses=ERROR_RESPONSES,
)
def airdrop(
    body: AirdropRequest,
    user: dict = Depends(authenticated),
    service: AirdropService = Depends(get_service),
):
    if body.recipients is None:
        return APIExceptionResponse(status.HTTP_400_BAD_REQUEST, "Recipients are required")

    logger.info(f"Airdrop requested by {user.get('id')}")
    return _run_airdrop(service, body.recipients)


@router.post(
    "/airdrop/csv",
    response_model=AirdropResponse,
    response_model_exclude_none=True,
    summary="Airdrop to recipients listed in an uploaded CSV file",
    responses=ERROR_RESPONSES,
)
def airdrop_csv(
    file: Optional[UploadFile] = File(None),
    user: dict = Depends(authenticated),
    service: AirdropService = Depends(get_service),
):
    if file is None:
        return APIExceptionResponse(status.HTTP_400_BAD_REQUEST, "No file uploaded")

    try:
        recipients = parse_recipients_csv(file.file.read())
    except CsvFormatError as e:
        logger.error(f"Error parsing CSV: {e}")
        return APIExceptionResponse(status.HTTP_400_BAD_REQUEST, "Error parsing CSV file")
    finally:
        file.file.close()

    if not recipients:
        return APIExceptionResponse(status.HTTP_400_BAD_REQUEST, "No valid recipients found in CSV")

    logger.info(f"CSV airdrop requested by {user.get('id')} ({file.filename})")
    return _run_airdrop(service, recipients)
