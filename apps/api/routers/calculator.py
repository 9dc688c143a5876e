"""
API роутер калькулятора стоимости, сравнения и ссылок на сравнение
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from core.config.settings import settings
from core.database.session import get_db_session
from core.logging.logger import logger
from apps.api.schemas import (
    CostRequest, CostResponse, CompareRequest, CompareResponse,
    ShareRequest, ShareResponse, SharedComparisonResponse,
)
from apps.api.services.agreement_service import AgreementService
from shared.models.agreement_data import AgreementData
from shared.services.comparison import ComparisonError, ComparisonSide, compare, normalize_level_index
from shared.services.cost_calculator import CostCalculationError, calculate_cost
from shared.services.share_link import (
    ShareLinkError, SharedComparisonParams, build_share_url, decode_share_params, encode_share_params,
)

router = APIRouter(tags=["calculator"])

INVALID_LINK = "Link non valido o scaduto"


def _include_percentage(flag: Optional[bool]) -> bool:
    return settings.include_percentage_rules if flag is None else flag


async def _load_agreement(service: AgreementService, external_id: str) -> AgreementData:
    agreement = await service.get_agreement_data(external_id)
    if agreement is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"CCNL '{external_id}' non trovato"
        )
    return agreement


async def _run_comparison(
    service: AgreementService,
    side1_id: str,
    level1: int,
    part_time1: bool,
    side2_id: str,
    level2: int,
    part_time2: bool,
    headcount: int,
    months_per_year: int,
    include_percentage_rules: Optional[bool],
) -> dict:
    agreement1 = await _load_agreement(service, side1_id)
    agreement2 = await _load_agreement(service, side2_id)
    try:
        result = compare(
            ComparisonSide(agreement1, level1, part_time1),
            ComparisonSide(agreement2, level2, part_time2),
            headcount=headcount,
            months_per_year=months_per_year,
            include_percentage_rules=_include_percentage(include_percentage_rules),
        )
    except (ComparisonError, CostCalculationError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return result.to_dict()


@router.post("/calculator/cost", response_model=CostResponse)
async def calculate_level_cost(
    request: CostRequest,
    db: AsyncSession = Depends(get_db_session)
):
    """Стоимость одного сотрудника на выбранном уровне договора."""
    agreement = await _load_agreement(AgreementService(db), request.agreement_id)
    try:
        index = normalize_level_index(agreement, request.level_index)
        level = agreement.levels[index]
        calculation = calculate_cost(
            level.base_salary_monthly,
            agreement.additional_costs,
            agreement,
            is_part_time=request.is_part_time,
            include_percentage_rules=_include_percentage(request.include_percentage_rules),
        )
    except (ComparisonError, CostCalculationError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return {
        "agreement_id": agreement.external_id,
        "agreement_name": agreement.name,
        "level_index": index,
        "level_code": level.code,
        "level_description": level.description,
        "is_part_time": request.is_part_time,
        "calculation": calculation.breakdown(),
    }


@router.post("/calculator/compare", response_model=CompareResponse)
async def compare_agreements(
    request: CompareRequest,
    db: AsyncSession = Depends(get_db_session)
):
    """Сравнение годовой стоимости персонала по двум договорам."""
    return await _run_comparison(
        AgreementService(db),
        request.side1.agreement_id, request.side1.level_index, request.side1.is_part_time,
        request.side2.agreement_id, request.side2.level_index, request.side2.is_part_time,
        request.headcount,
        request.months_per_year,
        request.include_percentage_rules,
    )


@router.post("/share", response_model=ShareResponse)
async def create_share_link(request: ShareRequest):
    """Кодирует параметры сравнения в ссылку."""
    token = encode_share_params(SharedComparisonParams(**request.model_dump()))
    return {"token": token, "url": build_share_url(settings.public_base_url, token)}


@router.get("/share/{token}", response_model=SharedComparisonResponse)
async def open_share_link(
    token: str,
    db: AsyncSession = Depends(get_db_session)
):
    """Декодирует ссылку и пересчитывает сравнение."""
    try:
        params = decode_share_params(token)
    except ShareLinkError as e:
        logger.warning("Invalid share link", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_LINK)

    comparison = await _run_comparison(
        AgreementService(db),
        params.ccnl1_id, params.level1, params.is_part_time,
        params.ccnl2_id, params.level2, params.side2_part_time,
        params.num_employees,
        params.months_per_year,
        None,
    )
    return {
        "params": {
            "ccnl1_id": params.ccnl1_id,
            "level1": params.level1,
            "ccnl2_id": params.ccnl2_id,
            "level2": params.level2,
            "num_employees": params.num_employees,
            "months_per_year": params.months_per_year,
            "is_part_time": params.is_part_time,
            "is_part_time2": params.is_part_time2,
        },
        "comparison": comparison,
    }
