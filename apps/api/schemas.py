"""
Схемы Pydantic для API CCNL Compare
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any
from datetime import date, datetime
from decimal import Decimal

from domain.entities.contribution_rule import ContributionCategory, ContributionMode
from domain.entities.service_request import ServiceRequestStatus


# ---------------------------------------------------------------------------
# Каталог договоров: входные данные
# ---------------------------------------------------------------------------

class LevelIn(BaseModel):
    """Уровень договора."""
    code: str = Field(..., min_length=1, max_length=64, description="Код уровня")
    description: str = Field("", max_length=255)
    base_salary_monthly: Decimal = Field(..., ge=0, description="Месячный оклад брутто")
    position: Optional[int] = Field(None, ge=0, description="Порядок отображения")


class LevelUpdate(BaseModel):
    """Обновление уровня."""
    code: Optional[str] = Field(None, min_length=1, max_length=64)
    description: Optional[str] = Field(None, max_length=255)
    base_salary_monthly: Optional[Decimal] = Field(None, ge=0)
    position: Optional[int] = Field(None, ge=0)


class AdditionalCostsIn(BaseModel):
    """Ставки TFR, взносов и прочих льгот."""
    severance_rate: Decimal = Field(..., ge=0, le=1000, description="TFR, % от оклада")
    social_rate: Decimal = Field(..., ge=0, le=1000, description="Взносы, % от оклада")
    other_rate: Decimal = Field(..., ge=0, le=1000, description="Прочие льготы, % от оклада")


class ContributionRuleIn(BaseModel):
    """Взнос по договору.

    Без явного mode режим определяется флагом is_percentage и названием взноса.
    """
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: ContributionCategory = ContributionCategory.OTHER
    mode: Optional[ContributionMode] = None
    is_percentage: bool = False
    amount: Decimal = Field(Decimal("0"), ge=0)
    part_time_amount: Optional[Decimal] = Field(None, ge=0)
    percentage: Decimal = Field(Decimal("0"), ge=0, le=1000)

    def to_data(self) -> Dict[str, Any]:
        data = self.model_dump()
        data["category"] = self.category.value
        data["mode"] = self.mode.value if self.mode else None
        return data


class ContributionRuleUpdate(BaseModel):
    """Обновление взноса."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[ContributionCategory] = None
    mode: Optional[ContributionMode] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    part_time_amount: Optional[Decimal] = Field(None, ge=0)
    percentage: Optional[Decimal] = Field(None, ge=0, le=1000)

    def to_data(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_none=True)
        if self.category:
            data["category"] = self.category.value
        if self.mode:
            data["mode"] = self.mode.value
        return data


class AgreementBase(BaseModel):
    """Базовые поля договора."""
    name: str = Field(..., min_length=1, max_length=500, description="Название договора")
    sector: str = Field(..., min_length=1, max_length=255)
    issuer: Optional[str] = Field(None, max_length=255)
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def validate_validity_window(self):
        """Окончание действия не раньше начала."""
        if self.valid_from and self.valid_to and self.valid_to < self.valid_from:
            raise ValueError("valid_to must not be earlier than valid_from")
        return self


class AgreementCreate(AgreementBase):
    """Создание договора каталога (администратор)."""
    external_id: str = Field(..., min_length=1, max_length=128, pattern=r"^[a-zA-Z0-9_.-]+$")
    sector_category: str = Field(..., min_length=1, max_length=64)
    is_house: bool = False
    cnel_code: Optional[str] = Field(None, max_length=10)
    cnel_macro_sector: Optional[str] = Field(None, max_length=100)
    employer_parties: Optional[str] = None
    union_parties: Optional[str] = None
    workers_count: Optional[int] = Field(None, ge=0)
    companies_count: Optional[int] = Field(None, ge=0)
    data_source: Optional[str] = Field(None, max_length=128)
    levels: List[LevelIn] = Field(default_factory=list)
    additional_costs: Optional[AdditionalCostsIn] = None
    contribution_rules: List[ContributionRuleIn] = Field(default_factory=list)

    def to_data(self) -> Dict[str, Any]:
        data = self.model_dump(exclude={"levels", "additional_costs", "contribution_rules"})
        data["levels"] = [level.model_dump() for level in self.levels]
        data["additional_costs"] = self.additional_costs.model_dump() if self.additional_costs else None
        data["contribution_rules"] = [rule.to_data() for rule in self.contribution_rules]
        return data


class AgreementUpdate(BaseModel):
    """Обновление полей договора каталога."""
    name: Optional[str] = Field(None, min_length=1, max_length=500)
    sector: Optional[str] = Field(None, min_length=1, max_length=255)
    sector_category: Optional[str] = Field(None, min_length=1, max_length=64)
    issuer: Optional[str] = Field(None, max_length=255)
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None
    description: Optional[str] = None
    is_house: Optional[bool] = None
    cnel_code: Optional[str] = Field(None, max_length=10)
    cnel_macro_sector: Optional[str] = Field(None, max_length=100)
    employer_parties: Optional[str] = None
    union_parties: Optional[str] = None
    workers_count: Optional[int] = Field(None, ge=0)
    companies_count: Optional[int] = Field(None, ge=0)
    data_source: Optional[str] = Field(None, max_length=128)


class CustomAgreementCreate(AgreementBase):
    """Пользовательский договор."""
    sector: str = Field("Personalizzato", min_length=1, max_length=255)
    levels: List[LevelIn] = Field(..., min_length=1)
    additional_costs: Optional[AdditionalCostsIn] = None
    contribution_rules: List[ContributionRuleIn] = Field(default_factory=list)

    def to_data(self) -> Dict[str, Any]:
        data = self.model_dump(exclude={"levels", "additional_costs", "contribution_rules"})
        data["levels"] = [level.model_dump() for level in self.levels]
        data["additional_costs"] = self.additional_costs.model_dump() if self.additional_costs else None
        data["contribution_rules"] = [rule.to_data() for rule in self.contribution_rules]
        return data


class CustomAgreementUpdate(BaseModel):
    """Обновление пользовательского договора; levels и contribution_rules заменяются целиком."""
    name: Optional[str] = Field(None, min_length=1, max_length=500)
    sector: Optional[str] = Field(None, min_length=1, max_length=255)
    issuer: Optional[str] = Field(None, max_length=255)
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None
    description: Optional[str] = None
    levels: Optional[List[LevelIn]] = None
    additional_costs: Optional[AdditionalCostsIn] = None
    contribution_rules: Optional[List[ContributionRuleIn]] = None

    @field_validator("levels")
    @classmethod
    def validate_levels(cls, v):
        """Договор не может остаться без уровней."""
        if v is not None and not v:
            raise ValueError("levels must contain at least one level")
        return v

    def to_data(self) -> Dict[str, Any]:
        data = self.model_dump(
            exclude_unset=True,
            exclude={"levels", "additional_costs", "contribution_rules"},
        )
        if self.levels is not None:
            data["levels"] = [level.model_dump() for level in self.levels]
        if self.additional_costs is not None:
            data["additional_costs"] = self.additional_costs.model_dump()
        if self.contribution_rules is not None:
            data["contribution_rules"] = [rule.to_data() for rule in self.contribution_rules]
        return data


# ---------------------------------------------------------------------------
# Каталог договоров: ответы
# ---------------------------------------------------------------------------

class LevelResponse(BaseModel):
    """Уровень в ответе."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    code: str
    description: str
    base_salary_monthly: float
    position: int = 0


class AdditionalCostsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    severance_rate: float
    social_rate: float
    other_rate: float


class ContributionRuleResponse(BaseModel):
    """Взнос в ответе."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    name: str
    description: Optional[str] = None
    category: str
    mode: str
    amount: float
    part_time_amount: Optional[float] = None
    percentage: float
    is_percentage: bool


class AgreementSummary(BaseModel):
    """Краткие данные договора для списков."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    external_id: str
    name: str
    sector: str
    sector_category: str
    issuer: Optional[str] = None
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None
    is_house: bool
    is_custom: bool
    cnel_code: Optional[str] = None
    cnel_macro_sector: Optional[str] = None
    workers_count: Optional[int] = None
    companies_count: Optional[int] = None


class AgreementResponse(AgreementSummary):
    """Договор с уровнями, взносами и дополнительными затратами."""
    description: Optional[str] = None
    employer_parties: Optional[str] = None
    union_parties: Optional[str] = None
    data_source: Optional[str] = None
    created_by: Optional[int] = None
    levels: List[LevelResponse] = Field(default_factory=list)
    additional_costs: Optional[AdditionalCostsResponse] = None
    contribution_rules: List[ContributionRuleResponse] = Field(default_factory=list)


class AgreementPage(BaseModel):
    """Страница каталога."""
    items: List[AgreementSummary]
    total_count: int
    total_pages: int
    current_page: int
    page_size: int


class SectorCategoryResponse(BaseModel):
    id: str
    name: str


# ---------------------------------------------------------------------------
# Калькулятор и сравнение
# ---------------------------------------------------------------------------

class CostRequest(BaseModel):
    """Расчет стоимости одного уровня."""
    agreement_id: str = Field(..., min_length=1, description="Внешний ключ договора")
    level_index: int = 0
    is_part_time: bool = False
    include_percentage_rules: Optional[bool] = Field(
        None, description="Учитывать процентные взносы; по умолчанию из настроек"
    )


class CostBreakdown(BaseModel):
    """Разбивка затрат на одного сотрудника в месяц."""
    base_salary: float
    severance_accrual: float
    social_contribution: float
    other_benefits: float
    fixed_contributions: float
    percentage_contributions: float
    additional_cost: float
    total_monthly_cost: float
    total_annual_cost: float
    total_cost_percentage: Optional[float] = None


class CostResponse(BaseModel):
    agreement_id: str
    agreement_name: str
    level_index: int
    level_code: str
    level_description: str
    is_part_time: bool
    calculation: CostBreakdown


class CompareSideIn(BaseModel):
    """Одна сторона сравнения."""
    agreement_id: str = Field(..., min_length=1)
    level_index: int = 0
    is_part_time: bool = False


class CompareRequest(BaseModel):
    """Сравнение двух договоров."""
    side1: CompareSideIn
    side2: CompareSideIn
    headcount: int = 1
    months_per_year: int = 12
    include_percentage_rules: Optional[bool] = None


class SideResponse(CostResponse):
    total_annual_cost: float


class CompareResponse(BaseModel):
    side1: SideResponse
    side2: SideResponse
    headcount: int
    months_per_year: int
    delta: float
    delta_percentage: float


class ShareRequest(BaseModel):
    """Параметры сравнения для ссылки."""
    ccnl1_id: str = Field(..., min_length=1)
    level1: int = 0
    ccnl2_id: str = Field(..., min_length=1)
    level2: int = 0
    num_employees: int = 1
    months_per_year: int = 12
    is_part_time: bool = False
    is_part_time2: Optional[bool] = None


class ShareResponse(BaseModel):
    token: str
    url: str


class SharedComparisonResponse(BaseModel):
    params: ShareRequest
    comparison: CompareResponse


# ---------------------------------------------------------------------------
# Toolkit
# ---------------------------------------------------------------------------

class ChecklistItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    position: int
    text: str
    notes: Optional[str] = None
    is_required: bool


class ChecklistSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    category: Optional[str] = None
    description: Optional[str] = None
    status: str


class ChecklistResponse(ChecklistSummary):
    items: List[ChecklistItemResponse] = Field(default_factory=list)


class TemplateFieldResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    label: str
    field_type: str
    required: bool
    default_value: Optional[str] = None
    help_text: Optional[str] = None
    position: int


class TemplateSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    category: Optional[str] = None
    description: Optional[str] = None
    format: str
    status: str


class TemplateResponse(TemplateSummary):
    content: str
    fields: List[TemplateFieldResponse] = Field(default_factory=list)
    placeholders: List[str] = Field(default_factory=list)


class RenderRequest(BaseModel):
    data: Dict[str, Any] = Field(default_factory=dict)


class RenderResponse(BaseModel):
    output: str
    missing_keys: List[str]
    missing_required: List[str]


# ---------------------------------------------------------------------------
# Нормативные источники
# ---------------------------------------------------------------------------

class LegalSourceSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    title: str
    issuing_body: Optional[str] = None
    official_url: Optional[str] = None
    published_at: Optional[str] = None
    effective_from: Optional[str] = None
    effective_to: Optional[str] = None
    status: str
    summary: Optional[str] = None
    updated_at: Optional[datetime] = None
    last_reviewed_at: Optional[datetime] = None


class LegalSourceVersionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    version: str
    change_note: Optional[str] = None
    created_at: Optional[datetime] = None


class LegalSourceResponse(LegalSourceSummary):
    body: Optional[str] = None
    created_at: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list, validation_alias="tag_names")
    versions: List[LegalSourceVersionResponse] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Услуги и заявки
# ---------------------------------------------------------------------------

class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: Optional[str] = None
    description: Optional[str] = None
    eligibility: Optional[str] = None
    procedure: Optional[str] = None
    sla_days: Optional[int] = None
    status: str


class ServiceRequestCreate(BaseModel):
    """Черновик заявки."""
    service_id: int
    subject: str = Field(..., min_length=3, max_length=300)
    notes: Optional[str] = Field(None, max_length=20000)

    @field_validator("subject")
    @classmethod
    def strip_subject(cls, v):
        """Тема без пробелов по краям."""
        v = v.strip()
        if len(v) < 3:
            raise ValueError("subject must contain at least 3 characters")
        return v


class StatusChangeRequest(BaseModel):
    status: ServiceRequestStatus
    note: Optional[str] = Field(None, max_length=5000)


class ServiceRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    service_id: int
    requester_user_id: int
    subject: str
    notes: Optional[str] = None
    status: str
    submitted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ServiceRequestPage(BaseModel):
    items: List[ServiceRequestResponse]
    total_count: int
    current_page: int
    page_size: int


# ---------------------------------------------------------------------------
# Статистика
# ---------------------------------------------------------------------------

class AggregateStatsResponse(BaseModel):
    total_agreements: int
    house_agreements: int
    national_agreements: int
    total_workers: int
    total_companies: int
    house_workers: int
    house_companies: int
    national_workers: int
    national_companies: int


class SectorStatsResponse(BaseModel):
    sector: str
    total_workers: int
    total_companies: int
    agreement_count: int


class MacroSectorStatsResponse(BaseModel):
    macro_sector: str
    total_workers: int
    total_companies: int
    agreement_count: int
    house_count: int


class ErrorResponse(BaseModel):
    """Схема для ошибок."""
    error: str
    message: str
    details: Optional[Any] = None
