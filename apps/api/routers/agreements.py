"""
API роутер каталога договоров (CCNL)
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from core.config.settings import settings
from core.database.session import get_db_session
from core.logging.logger import logger
from apps.api.dependencies import CurrentUser, require_user, require_admin
from apps.api.schemas import (
    AgreementCreate, AgreementUpdate, AgreementResponse, AgreementSummary, AgreementPage,
    CustomAgreementCreate, CustomAgreementUpdate, SectorCategoryResponse,
    LevelIn, LevelUpdate, LevelResponse, AdditionalCostsIn, AdditionalCostsResponse,
    ContributionRuleIn, ContributionRuleUpdate, ContributionRuleResponse,
)
from apps.api.services.agreement_service import AgreementService, AgreementAccessError

router = APIRouter(prefix="/agreements", tags=["agreements"])
admin_router = APIRouter(prefix="/admin/agreements", tags=["admin"])

NOT_FOUND = "CCNL non trovato"


@router.get("/", response_model=AgreementPage)
async def list_agreements(
    page: int = Query(1, ge=1, description="Номер страницы"),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Размер страницы"),
    search: Optional[str] = Query(None, description="Поиск по названию, сектору, эмитенту, коду CNEL"),
    sector: Optional[str] = Query(None),
    issuer: Optional[str] = Query(None),
    macro_sector: Optional[str] = Query(None),
    sector_category: Optional[str] = Query(None),
    issuer_class: Optional[str] = Query(None, pattern="^(house|national|all)$"),
    sort_by: str = Query("name", pattern="^(name|sector|issuer|valid_from|workers_count|external_id)$"),
    sort_dir: str = Query("asc", pattern="^(asc|desc)$"),
    db: AsyncSession = Depends(get_db_session)
):
    """Постраничный список договоров каталога."""
    service = AgreementService(db)
    return await service.get_paginated(
        page=page,
        page_size=page_size,
        search=search,
        sector=sector,
        issuer=issuer,
        macro_sector=macro_sector,
        sector_category=sector_category,
        issuer_class=issuer_class,
        sort_by=sort_by,
        sort_dir=sort_dir,
    )


@router.get("/sector-categories", response_model=List[SectorCategoryResponse])
async def get_sector_categories():
    """Категории секторов для фильтров."""
    return AgreementService.get_sector_categories()


@router.get("/search", response_model=List[AgreementSummary])
async def search_agreements(
    q: str = Query(..., min_length=1, description="Строка поиска"),
    limit: int = Query(settings.search_limit, ge=1, le=settings.max_page_size),
    db: AsyncSession = Depends(get_db_session)
):
    """Поиск по каталогу."""
    return await AgreementService(db).search(q, limit)


@router.get("/by-sector/{sector_category}", response_model=List[AgreementSummary])
async def get_by_sector_category(
    sector_category: str,
    db: AsyncSession = Depends(get_db_session)
):
    """Договоры по категории сектора ("all" без фильтра)."""
    return await AgreementService(db).get_by_sector_category(sector_category)


@router.get("/by-issuer/{issuer_class}", response_model=List[AgreementSummary])
async def get_by_issuer_class(
    issuer_class: str,
    sector_category: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db_session)
):
    """Собственные (house) или национальные (national) договоры."""
    if issuer_class not in ("house", "national"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Classe emittente non valida"
        )
    return await AgreementService(db).get_by_issuer_class(issuer_class == "house", sector_category)


# ---------------------------------------------------------------------------
# Пользовательские договоры
# ---------------------------------------------------------------------------

@router.get("/custom/mine", response_model=List[AgreementResponse])
async def get_my_custom_agreements(
    user: CurrentUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Пользовательские договоры текущего пользователя."""
    return await AgreementService(db).get_custom_for_user(user.id)


@router.post("/custom", response_model=AgreementResponse, status_code=status.HTTP_201_CREATED)
async def create_custom_agreement(
    data: CustomAgreementCreate,
    user: CurrentUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Создание пользовательского договора."""
    try:
        return await AgreementService(db).create_custom(user.id, data.to_data())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/custom/{agreement_id}", response_model=AgreementResponse)
async def update_custom_agreement(
    agreement_id: int,
    data: CustomAgreementUpdate,
    user: CurrentUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Обновление пользовательского договора владельцем."""
    try:
        agreement = await AgreementService(db).update_custom(agreement_id, user.id, data.to_data())
    except AgreementAccessError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Non autorizzato")
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not agreement:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return agreement


@router.delete("/custom/{agreement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_custom_agreement(
    agreement_id: int,
    user: CurrentUser = Depends(require_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Удаление пользовательского договора владельцем."""
    try:
        deleted = await AgreementService(db).delete_custom(agreement_id, user.id)
    except AgreementAccessError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Non autorizzato")

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)


@router.get("/{external_id}", response_model=AgreementResponse)
async def get_agreement(
    external_id: str,
    db: AsyncSession = Depends(get_db_session)
):
    """Полные данные договора по внешнему ключу."""
    agreement = await AgreementService(db).get_by_external_id(external_id)
    if not agreement:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return agreement


# ---------------------------------------------------------------------------
# Администрирование каталога
# ---------------------------------------------------------------------------

@admin_router.post("/", response_model=AgreementResponse, status_code=status.HTTP_201_CREATED)
async def create_agreement(
    data: AgreementCreate,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """Создание договора каталога."""
    service = AgreementService(db)
    if await service.get_by_external_id(data.external_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"CCNL '{data.external_id}' già esistente"
        )

    agreement = await service.create_agreement(data.to_data())
    logger.info("Catalog agreement created by admin", agreement_id=agreement.id, admin_id=admin.id)
    return agreement


@admin_router.put("/{agreement_id}", response_model=AgreementResponse)
async def update_agreement(
    agreement_id: int,
    data: AgreementUpdate,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """Обновление договора каталога."""
    agreement = await AgreementService(db).update_agreement(agreement_id, data.model_dump(exclude_unset=True))
    if not agreement:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return agreement


@admin_router.delete("/{agreement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_agreement(
    agreement_id: int,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """Удаление договора каталога со всеми уровнями и взносами."""
    if not await AgreementService(db).delete_agreement(agreement_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)


@admin_router.post("/{agreement_id}/levels", response_model=LevelResponse, status_code=status.HTTP_201_CREATED)
async def create_level(
    agreement_id: int,
    data: LevelIn,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """Добавление уровня."""
    level = await AgreementService(db).create_level(agreement_id, data.model_dump())
    if not level:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return level


@admin_router.put("/levels/{level_id}", response_model=LevelResponse)
async def update_level(
    level_id: int,
    data: LevelUpdate,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """Обновление уровня."""
    level = await AgreementService(db).update_level(level_id, data.model_dump(exclude_unset=True))
    if not level:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Livello non trovato")
    return level


@admin_router.delete("/levels/{level_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_level(
    level_id: int,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """Удаление уровня."""
    if not await AgreementService(db).delete_level(level_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Livello non trovato")


@admin_router.put("/{agreement_id}/additional-costs", response_model=AdditionalCostsResponse)
async def upsert_additional_costs(
    agreement_id: int,
    data: AdditionalCostsIn,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """Создание или обновление дополнительных затрат."""
    costs = await AgreementService(db).upsert_additional_costs(agreement_id, data.model_dump())
    if not costs:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return costs


@admin_router.post(
    "/{agreement_id}/contributions",
    response_model=ContributionRuleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_contribution_rule(
    agreement_id: int,
    data: ContributionRuleIn,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """Добавление взноса."""
    rule = await AgreementService(db).create_contribution_rule(agreement_id, data.to_data())
    if not rule:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return rule


@admin_router.put("/contributions/{rule_id}", response_model=ContributionRuleResponse)
async def update_contribution_rule(
    rule_id: int,
    data: ContributionRuleUpdate,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """Обновление взноса."""
    rule = await AgreementService(db).update_contribution_rule(rule_id, data.to_data())
    if not rule:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contributo non trovato")
    return rule


@admin_router.delete("/contributions/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contribution_rule(
    rule_id: int,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """Удаление взноса."""
    if not await AgreementService(db).delete_contribution_rule(rule_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contributo non trovato")
