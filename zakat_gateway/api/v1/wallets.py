"""GET /v1/wallets/{address}/... - balances view and Hawl estimates"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from zakat_gateway.api.dependencies import get_request_id, get_screening_service
from zakat_gateway.api.v1.errors import to_http_exception
from zakat_gateway.api.v1.schemas import AssetSchema, BalancesResponse, HawlResponse, LiabilitySchema
from zakat_gateway.domain.exceptions import DomainException
from zakat_gateway.domain.hawl import HAWL_NOTE
from zakat_gateway.services.screening import ZakatScreeningService

router = APIRouter()


@router.get("/wallets/{address}/balances", response_model=BalancesResponse)
async def get_balances(
    address: str,
    request: Request,
    chain_id: int | None = Query(None, gt=0, description="Chain to query"),
    service: ZakatScreeningService = Depends(get_screening_service),
):
    """
    Every parsed balance of the wallet with its liquidity flag, plus the
    positions detected as debts.
    """
    request_id = get_request_id(request)

    try:
        screening = await service.screen_wallet(address, chain_id)
    except DomainException as e:
        raise to_http_exception(e, request_id)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return BalancesResponse(
        address=address,
        chain_id=screening.chain_id,
        holdings=[AssetSchema.from_record(h) for h in screening.holdings],
        liabilities=[LiabilitySchema.from_record(l) for l in screening.liabilities],
    )


@router.get("/wallets/{address}/hawl", response_model=HawlResponse)
async def get_hawl(
    address: str,
    request: Request,
    chain_id: int | None = Query(None, gt=0, description="Chain to query"),
    service: ZakatScreeningService = Depends(get_screening_service),
):
    """
    Advisory estimates of the minimum held over the past year.

    Returns both the forward monthly replay and the backward one-year
    reconstruction; neither affects the liability verdict.
    """
    request_id = get_request_id(request)

    try:
        report = await service.estimate_hawl(address, chain_id)
    except DomainException as e:
        raise to_http_exception(e, request_id)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return HawlResponse.from_report(report, HAWL_NOTE)
