from fastapi import APIRouter, Depends, HTTPException, Query, status

from fxrates.core.exceptions import InvalidArgument, RateFetchFailed
from fxrates.core.wiring import get_conversion_service
from fxrates.schemas.conversion import ConversionResponse
from fxrates.services.conversion_service import ConversionService

router = APIRouter(tags=["convert"])


# Sync endpoint: runs in FastAPI's threadpool, where the rate cache blocks
# same-key callers until the in-flight fetch finishes.
@router.get("/api/convert", response_model=ConversionResponse)
def convert(
    from_currency: str = Query(...),
    to_currency: str = Query(...),
    amount: float = Query(...),
    service: ConversionService = Depends(get_conversion_service),
):
    try:
        converted = service.convert(from_currency, to_currency, amount)
    except InvalidArgument as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except RateFetchFailed as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch rate {e.pair}",
        )

    return ConversionResponse(
        from_currency=from_currency.upper(),
        to_currency=to_currency.upper(),
        amount=amount,
        converted_amount=converted,
    )
