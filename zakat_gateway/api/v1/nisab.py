"""GET /v1/nisab - current Nisab threshold and metal prices"""

from fastapi import APIRouter, Depends, Request

from zakat_gateway.api.dependencies import get_request_id, get_screening_service
from zakat_gateway.api.v1.errors import to_http_exception
from zakat_gateway.api.v1.schemas import NisabResponse
from zakat_gateway.domain.exceptions import DomainException
from zakat_gateway.services.screening import ZakatScreeningService

router = APIRouter()


@router.get("/nisab", response_model=NisabResponse)
async def get_nisab(request: Request, service: ZakatScreeningService = Depends(get_screening_service)):
    """Lesser of 85g gold and 595g silver at current prices"""
    try:
        prices, threshold = await service.get_nisab_breakdown()
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))

    return NisabResponse.from_threshold(prices, threshold)
