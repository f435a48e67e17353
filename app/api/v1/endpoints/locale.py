from fastapi import APIRouter
from pydantic import BaseModel

from app.engine.locale import currency_presentation, resolve_locale
from app.engine.models import LocalePresentation

router = APIRouter()


class LocaleResponse(BaseModel):
    country: str
    currency_code: str
    presentation: LocalePresentation


@router.get("/currency/{currency_code}", response_model=LocalePresentation)
async def presentation_for_currency(currency_code: str):
    return currency_presentation(currency_code)


@router.get("/{country}", response_model=LocaleResponse)
async def locale_for_country(country: str):
    resolved = resolve_locale(country)
    return LocaleResponse(country=country, **resolved)
