"""
Сервис каталога договоров (CCNL) через базу данных
"""

import math
import uuid
from typing import List, Optional, Dict, Any

from sqlalchemy import select, func, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession

from core.config.settings import settings
from core.logging.logger import logger
from domain.entities.agreement import Agreement
from domain.entities.agreement_level import AgreementLevel
from domain.entities.agreement_additional_costs import AgreementAdditionalCosts
from domain.entities.contribution_rule import ContributionRule, ContributionMode, ContributionCategory
from shared.models.agreement_data import (
    AgreementData,
    LevelData,
    AdditionalCostsData,
    ContributionRuleData,
    normalize_contribution_rule,
    to_decimal,
)


# Категории секторов для фильтров каталога
SECTOR_CATEGORIES: Dict[str, str] = {
    "turismo": "Turismo e Ospitalità",
    "commercio": "Commercio e Distribuzione",
    "artigianato": "Artigianato",
    "logistica": "Logistica e Trasporto",
    "servizi": "Servizi Generali",
    "multiservizi": "Multiservizi e Pulizie",
    "sanita": "Sanità e Assistenza",
}

# Колонки, по которым разрешена сортировка списка
SORTABLE_COLUMNS = {
    "name": Agreement.name,
    "sector": Agreement.sector,
    "issuer": Agreement.issuer,
    "valid_from": Agreement.valid_from,
    "workers_count": Agreement.workers_count,
    "external_id": Agreement.external_id,
}

_AGREEMENT_FIELDS = (
    "external_id", "name", "sector", "sector_category", "issuer", "valid_from", "valid_to",
    "description", "is_house", "cnel_code", "cnel_macro_sector", "employer_parties",
    "union_parties", "workers_count", "companies_count", "data_source",
)
_LEVEL_FIELDS = ("code", "description", "base_salary_monthly", "position")
_COSTS_FIELDS = ("severance_rate", "social_rate", "other_rate")


class AgreementAccessError(PermissionError):
    """Пользователь не является владельцем пользовательского договора."""


def _is_filter_set(value: Optional[str]) -> bool:
    return bool(value) and value != "all"


def _build_level(data: Dict[str, Any], position: int) -> AgreementLevel:
    return AgreementLevel(
        code=data["code"],
        description=data.get("description") or "",
        base_salary_monthly=to_decimal(data["base_salary_monthly"]),
        position=data["position"] if data.get("position") is not None else position,
    )


def _build_costs(data: Dict[str, Any]) -> AgreementAdditionalCosts:
    return AgreementAdditionalCosts(
        severance_rate=to_decimal(data["severance_rate"]),
        social_rate=to_decimal(data["social_rate"]),
        other_rate=to_decimal(data["other_rate"]),
    )


def _rule_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    fields = normalize_contribution_rule(
        name=data["name"],
        is_percentage=data.get("is_percentage", False),
        amount=data.get("amount"),
        percentage=data.get("percentage"),
        part_time_amount=data.get("part_time_amount"),
        mode=data.get("mode"),
    )
    fields["name"] = data["name"]
    fields["description"] = data.get("description")
    fields["category"] = data.get("category") or ContributionCategory.OTHER.value
    return fields


def _build_rule(data: Dict[str, Any]) -> ContributionRule:
    return ContributionRule(**_rule_fields(data))


def to_agreement_data(agreement: Agreement) -> AgreementData:
    """Преобразует ORM-договор в значения для калькулятора."""
    costs = agreement.additional_costs
    if costs is not None:
        additional_costs = AdditionalCostsData(
            severance_rate=to_decimal(costs.severance_rate),
            social_rate=to_decimal(costs.social_rate),
            other_rate=to_decimal(costs.other_rate),
        )
    else:
        additional_costs = AdditionalCostsData.default()

    return AgreementData(
        external_id=agreement.external_id,
        name=agreement.name,
        levels=tuple(
            LevelData(
                code=level.code,
                description=level.description,
                base_salary_monthly=to_decimal(level.base_salary_monthly),
            )
            for level in agreement.levels
        ),
        contribution_rules=tuple(
            ContributionRuleData(
                name=rule.name,
                mode=ContributionMode(rule.mode),
                amount=to_decimal(rule.amount),
                part_time_amount=(
                    to_decimal(rule.part_time_amount) if rule.part_time_amount is not None else None
                ),
                percentage=to_decimal(rule.percentage),
                category=ContributionCategory(rule.category),
                description=rule.description,
            )
            for rule in agreement.contribution_rules
        ),
        additional_costs=additional_costs,
        sector=agreement.sector,
        sector_category=agreement.sector_category,
        issuer=agreement.issuer,
        is_custom=bool(agreement.is_custom),
    )


class AgreementService:
    """Сервис для работы с каталогом договоров в базе данных."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ------------------------------------------------------------------
    # Чтение
    # ------------------------------------------------------------------

    async def get_by_external_id(self, external_id: str) -> Optional[Agreement]:
        """Получает договор со всеми уровнями, взносами и затратами по внешнему ключу."""
        query = select(Agreement).where(Agreement.external_id == external_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_id(self, agreement_id: int) -> Optional[Agreement]:
        """Получает договор по ID."""
        query = select(Agreement).where(Agreement.id == agreement_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    # Связи загружаются selectin, поэтому полный договор совпадает с get_by_id
    get_complete = get_by_id

    async def get_all(self) -> List[Agreement]:
        """Все договоры каталога (без пользовательских), по названию."""
        query = (
            select(Agreement)
            .where(Agreement.is_custom == False)
            .order_by(Agreement.name, Agreement.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_by_sector_category(self, sector_category: Optional[str]) -> List[Agreement]:
        """Договоры каталога по категории сектора; "all" означает без фильтра."""
        if not _is_filter_set(sector_category):
            return await self.get_all()

        query = (
            select(Agreement)
            .where(
                and_(
                    Agreement.is_custom == False,
                    Agreement.sector_category == sector_category,
                )
            )
            .order_by(Agreement.name, Agreement.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_by_issuer_class(
        self,
        house: bool,
        sector_category: Optional[str] = None,
    ) -> List[Agreement]:
        """Собственные (house) или национальные договоры, опционально по категории сектора."""
        conditions = [Agreement.is_custom == False, Agreement.is_house == house]
        if _is_filter_set(sector_category):
            conditions.append(Agreement.sector_category == sector_category)

        query = select(Agreement).where(and_(*conditions)).order_by(Agreement.name, Agreement.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def search(self, query_text: str, limit: Optional[int] = None) -> List[Agreement]:
        """Регистронезависимый поиск по названию, сектору, эмитенту, коду CNEL и макросектору."""
        term = (query_text or "").strip()
        if not term:
            return []

        limit = limit or settings.search_limit
        query = (
            select(Agreement)
            .where(and_(Agreement.is_custom == False, self._search_condition(term)))
            .order_by(Agreement.name, Agreement.id)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    @staticmethod
    def _search_condition(term: str):
        pattern = f"%{term}%"
        return or_(
            Agreement.name.ilike(pattern),
            Agreement.sector.ilike(pattern),
            Agreement.issuer.ilike(pattern),
            Agreement.cnel_code.ilike(pattern),
            Agreement.external_id.ilike(pattern),
            Agreement.cnel_macro_sector.ilike(pattern),
        )

    async def get_paginated(
        self,
        page: int = 1,
        page_size: Optional[int] = None,
        search: Optional[str] = None,
        sector: Optional[str] = None,
        issuer: Optional[str] = None,
        macro_sector: Optional[str] = None,
        sector_category: Optional[str] = None,
        issuer_class: Optional[str] = None,
        sort_by: str = "name",
        sort_dir: str = "asc",
    ) -> Dict[str, Any]:
        """
        Постраничный список договоров каталога.

        Порядок детерминирован: выбранная колонка, затем id.

        Returns:
            dict: items, total_count, total_pages, current_page, page_size
        """
        page = max(1, page)
        page_size = page_size or settings.default_page_size
        page_size = max(1, min(page_size, settings.max_page_size))

        conditions = [Agreement.is_custom == False]
        if search and search.strip():
            conditions.append(self._search_condition(search.strip()))
        if _is_filter_set(sector):
            conditions.append(Agreement.sector == sector)
        if _is_filter_set(issuer):
            conditions.append(Agreement.issuer.ilike(f"%{issuer}%"))
        if _is_filter_set(macro_sector):
            conditions.append(Agreement.cnel_macro_sector == macro_sector)
        if _is_filter_set(sector_category):
            conditions.append(Agreement.sector_category == sector_category)
        if issuer_class in ("house", "national"):
            conditions.append(Agreement.is_house == (issuer_class == "house"))

        where_clause = and_(*conditions)

        count_query = select(func.count()).select_from(Agreement).where(where_clause)
        count_result = await self.session.execute(count_query)
        total_count = int(count_result.scalar_one() or 0)
        total_pages = math.ceil(total_count / page_size) if total_count else 0

        column = SORTABLE_COLUMNS.get(sort_by, Agreement.name)
        if sort_dir == "desc":
            order = (column.desc(), Agreement.id.desc())
        else:
            order = (column.asc(), Agreement.id.asc())

        query = (
            select(Agreement)
            .where(where_clause)
            .order_by(*order)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self.session.execute(query)

        return {
            "items": list(result.scalars().all()),
            "total_count": total_count,
            "total_pages": total_pages,
            "current_page": page,
            "page_size": page_size,
        }

    @staticmethod
    def get_sector_categories() -> List[Dict[str, str]]:
        """Категории секторов с отображаемыми названиями."""
        return [{"id": key, "name": label} for key, label in SECTOR_CATEGORIES.items()]

    # ------------------------------------------------------------------
    # Администрирование каталога
    # ------------------------------------------------------------------

    async def create_agreement(self, data: Dict[str, Any]) -> Agreement:
        """
        Создает договор вместе с уровнями, затратами и взносами.

        Args:
            data: Поля договора; опционально levels, additional_costs, contribution_rules
        """
        agreement = Agreement(
            **{key: data[key] for key in _AGREEMENT_FIELDS if key in data},
            is_custom=data.get("is_custom", False),
            created_by=data.get("created_by"),
        )
        agreement.levels = [
            _build_level(level, position) for position, level in enumerate(data.get("levels") or [])
        ]
        if data.get("additional_costs"):
            agreement.additional_costs = _build_costs(data["additional_costs"])
        agreement.contribution_rules = [_build_rule(rule) for rule in data.get("contribution_rules") or []]

        self.session.add(agreement)
        await self.session.commit()
        await self.session.refresh(agreement)

        logger.info(
            "Agreement created",
            agreement_id=agreement.id,
            external_id=agreement.external_id,
            is_custom=agreement.is_custom,
        )
        return agreement

    async def update_agreement(self, agreement_id: int, data: Dict[str, Any]) -> Optional[Agreement]:
        """Обновляет поля договора."""
        agreement = await self.get_by_id(agreement_id)
        if not agreement:
            logger.warning(f"Agreement {agreement_id} not found for update")
            return None

        for key in _AGREEMENT_FIELDS:
            if key in data:
                setattr(agreement, key, data[key])

        await self.session.commit()
        await self.session.refresh(agreement)
        logger.info(f"Agreement {agreement_id} updated")
        return agreement

    async def delete_agreement(self, agreement_id: int) -> bool:
        """Удаляет договор вместе с уровнями, затратами и взносами."""
        agreement = await self.get_by_id(agreement_id)
        if not agreement:
            logger.warning(f"Agreement {agreement_id} not found for delete")
            return False

        await self.session.delete(agreement)
        await self.session.commit()
        logger.info(f"Agreement {agreement_id} deleted")
        return True

    async def create_level(self, agreement_id: int, data: Dict[str, Any]) -> Optional[AgreementLevel]:
        """Добавляет уровень к договору."""
        agreement = await self.get_by_id(agreement_id)
        if not agreement:
            return None

        level = _build_level(data, len(agreement.levels))
        level.agreement_id = agreement.id
        self.session.add(level)
        await self.session.commit()
        await self.session.refresh(level)
        logger.info(f"Level {level.id} created for agreement {agreement_id}")
        return level

    async def update_level(self, level_id: int, data: Dict[str, Any]) -> Optional[AgreementLevel]:
        """Обновляет уровень."""
        level = await self.session.get(AgreementLevel, level_id)
        if not level:
            return None

        for key in _LEVEL_FIELDS:
            if key in data and data[key] is not None:
                value = to_decimal(data[key]) if key == "base_salary_monthly" else data[key]
                setattr(level, key, value)

        await self.session.commit()
        await self.session.refresh(level)
        logger.info(f"Level {level_id} updated")
        return level

    async def delete_level(self, level_id: int) -> bool:
        """Удаляет уровень."""
        level = await self.session.get(AgreementLevel, level_id)
        if not level:
            return False

        await self.session.delete(level)
        await self.session.commit()
        logger.info(f"Level {level_id} deleted")
        return True

    async def upsert_additional_costs(
        self,
        agreement_id: int,
        data: Dict[str, Any],
    ) -> Optional[AgreementAdditionalCosts]:
        """Создает или обновляет дополнительные затраты договора."""
        agreement = await self.get_by_id(agreement_id)
        if not agreement:
            return None

        costs = agreement.additional_costs
        if costs is None:
            costs = _build_costs(data)
            costs.agreement_id = agreement.id
            self.session.add(costs)
        else:
            for key in _COSTS_FIELDS:
                if key in data:
                    setattr(costs, key, to_decimal(data[key]))

        await self.session.commit()
        await self.session.refresh(costs)
        logger.info(f"Additional costs saved for agreement {agreement_id}")
        return costs

    async def create_contribution_rule(
        self,
        agreement_id: int,
        data: Dict[str, Any],
    ) -> Optional[ContributionRule]:
        """Добавляет взнос к договору."""
        agreement = await self.get_by_id(agreement_id)
        if not agreement:
            return None

        rule = _build_rule(data)
        rule.agreement_id = agreement.id
        self.session.add(rule)
        await self.session.commit()
        await self.session.refresh(rule)
        logger.info(f"Contribution rule {rule.id} created for agreement {agreement_id}", mode=rule.mode)
        return rule

    async def update_contribution_rule(self, rule_id: int, data: Dict[str, Any]) -> Optional[ContributionRule]:
        """Обновляет взнос; режим и суммы пересчитываются из переданных данных."""
        rule = await self.session.get(ContributionRule, rule_id)
        if not rule:
            return None

        merged = {
            "name": rule.name,
            "description": rule.description,
            "category": rule.category,
            "mode": rule.mode,
            "amount": rule.amount,
            "part_time_amount": rule.part_time_amount,
            "percentage": rule.percentage,
        }
        merged.update({key: value for key, value in data.items() if value is not None})
        for key, value in _rule_fields(merged).items():
            setattr(rule, key, value)

        await self.session.commit()
        await self.session.refresh(rule)
        logger.info(f"Contribution rule {rule_id} updated")
        return rule

    async def delete_contribution_rule(self, rule_id: int) -> bool:
        """Удаляет взнос."""
        rule = await self.session.get(ContributionRule, rule_id)
        if not rule:
            return False

        await self.session.delete(rule)
        await self.session.commit()
        logger.info(f"Contribution rule {rule_id} deleted")
        return True

    # ------------------------------------------------------------------
    # Пользовательские договоры
    # ------------------------------------------------------------------

    async def create_custom(self, user_id: int, data: Dict[str, Any]) -> Agreement:
        """Создает пользовательский договор в одной транзакции."""
        if not data.get("levels"):
            raise ValueError("A custom agreement needs at least one level")

        payload = dict(data)
        payload["external_id"] = f"custom_{user_id}_{uuid.uuid4().hex[:12]}"
        payload["is_custom"] = True
        payload["is_house"] = False
        payload["created_by"] = user_id
        payload.setdefault("sector_category", "custom")
        payload.setdefault("data_source", "custom")
        return await self.create_agreement(payload)

    async def get_custom_for_user(self, user_id: int) -> List[Agreement]:
        """Пользовательские договоры пользователя."""
        query = (
            select(Agreement)
            .where(and_(Agreement.is_custom == True, Agreement.created_by == user_id))
            .order_by(Agreement.created_at.desc(), Agreement.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def _get_owned_custom(self, agreement_id: int, user_id: int) -> Optional[Agreement]:
        agreement = await self.get_by_id(agreement_id)
        if not agreement or not agreement.is_custom:
            return None
        if not agreement.is_owned_by(user_id):
            logger.warning(
                "Custom agreement access denied",
                agreement_id=agreement_id,
                user_id=user_id,
            )
            raise AgreementAccessError(f"User {user_id} does not own agreement {agreement_id}")
        return agreement

    async def update_custom(self, agreement_id: int, user_id: int, data: Dict[str, Any]) -> Optional[Agreement]:
        """
        Обновляет пользовательский договор владельца.

        Переданные levels и contribution_rules заменяют существующие целиком.

        Raises:
            AgreementAccessError: Пользователь не владелец
        """
        agreement = await self._get_owned_custom(agreement_id, user_id)
        if not agreement:
            return None

        for key in ("name", "sector", "issuer", "description", "valid_from", "valid_to"):
            if key in data:
                setattr(agreement, key, data[key])

        if data.get("levels") is not None:
            if not data["levels"]:
                raise ValueError("A custom agreement needs at least one level")
            agreement.levels = [
                _build_level(level, position) for position, level in enumerate(data["levels"])
            ]
        if data.get("contribution_rules") is not None:
            agreement.contribution_rules = [_build_rule(rule) for rule in data["contribution_rules"]]
        if data.get("additional_costs"):
            if agreement.additional_costs is None:
                agreement.additional_costs = _build_costs(data["additional_costs"])
            else:
                for key in _COSTS_FIELDS:
                    setattr(agreement.additional_costs, key, to_decimal(data["additional_costs"][key]))

        await self.session.commit()
        await self.session.refresh(agreement)
        logger.info("Custom agreement updated", agreement_id=agreement_id, user_id=user_id)
        return agreement

    async def delete_custom(self, agreement_id: int, user_id: int) -> bool:
        """
        Удаляет пользовательский договор владельца.

        Raises:
            AgreementAccessError: Пользователь не владелец
        """
        agreement = await self._get_owned_custom(agreement_id, user_id)
        if not agreement:
            return False

        await self.session.delete(agreement)
        await self.session.commit()
        logger.info("Custom agreement deleted", agreement_id=agreement_id, user_id=user_id)
        return True

    async def get_agreement_data(self, external_id: str) -> Optional[AgreementData]:
        """Договор по внешнему ключу в виде значений для калькулятора."""
        agreement = await self.get_by_external_id(external_id)
        if not agreement:
            return None
        return to_agreement_data(agreement)
