"""POST /v1/zakat/screen and /v1/zakat/payment - zakat liability and payment"""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Request

from zakat_gateway.api.dependencies import get_request_id, get_screening_service
from zakat_gateway.api.v1.errors import to_http_exception
from zakat_gateway.api.v1.schemas import (
    AssetSchema,
    HawlResponse,
    LiabilitySchema,
    PaymentRequest,
    PaymentResponse,
    ScreenRequest,
    ScreenResponse,
)
from zakat_gateway.config import settings
from zakat_gateway.domain.exceptions import DomainException
from zakat_gateway.domain.hawl import HAWL_NOTE
from zakat_gateway.domain.payment import build_payment_call
from zakat_gateway.infrastructure.observability.logging import log_screening
from zakat_gateway.infrastructure.observability.metrics import record_screening
from zakat_gateway.services.screening import ZakatScreeningService

router = APIRouter()


@router.post("/zakat/screen", response_model=ScreenResponse)
async def screen_wallet(
    request_body: ScreenRequest,
    request: Request,
    service: ZakatScreeningService = Depends(get_screening_service),
):
    """
    Compute a wallet's zakat liability.

    Flow:
    1. Fetch balances (plus metal prices if no Nisab given, transfers if Hawl requested)
    2. Classify holdings and liabilities, net them
    3. Deduct user-declared debts, compare against the Nisab, apply 2.5%
    4. Optionally attach the advisory Hawl estimates
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = await service.assess_wallet(
            request_body.address,
            chain_id=request_body.chain_id,
            nisab=request_body.nisab,
            user_debts_usd=request_body.user_debts_usd,
            include_hawl=request_body.include_hawl,
        )

    except DomainException as e:
        raise to_http_exception(e, request_id)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_screening(result.is_liable, result.zakat_due)
    log_screening(request_id, result.address, result.chain_id, result.is_liable, result.zakat_due, duration_ms)

    return ScreenResponse(
        address=result.address,
        chain_id=result.chain_id,
        total_net_usd=result.total_net_usd,
        nisab=result.nisab,
        is_liable=result.is_liable,
        zakat_due=result.zakat_due,
        diagnostic=result.diagnostic,
        liquid_total_usd=result.liquid_total_usd,
        liabilities_total_usd=result.liabilities_total_usd,
        user_debts_usd=result.user_debts_usd,
        halal_score=result.halal_score,
        assets=[AssetSchema.from_record(a) for a in result.assets],
        liabilities=[LiabilitySchema.from_record(l) for l in result.liabilities],
        hawl=HawlResponse.from_report(result.hawl, HAWL_NOTE) if result.hawl else None,
    )


@router.post("/zakat/payment", response_model=PaymentResponse)
def prepare_payment(request_body: PaymentRequest, request: Request):
    """
    Build the stablecoin transfer paying zakat to the configured recipient.

    The call comes back unsigned; the payer's wallet signs and submits it.
    """
    request_id = get_request_id(request)

    try:
        call = build_payment_call(
            request_body.amount_usd,
            token_address=settings.payment_token_address,
            recipient=settings.zakat_recipient_address,
            decimals=settings.payment_token_decimals,
        )
    except DomainException as e:
        raise to_http_exception(e, request_id)

    logging.info(
        "Zakat payment prepared",
        extra={
            "request_id": request_id,
            "payer": request_body.payer_address,
            "amount_base_units": call.amount_base_units,
        },
    )

    return PaymentResponse(
        from_address=request_body.payer_address,
        to=call.to,
        data=call.data,
        value=str(call.value),
        recipient=call.recipient,
        token_address=call.to,
        amount_usd=str(call.amount_usd),
        amount_base_units=str(call.amount_base_units),
    )
