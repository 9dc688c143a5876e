"""
Модуль доменных сущностей CCNL Compare
"""

# Импортируем модели в правильном порядке
from .base import Base
from .agreement import Agreement
from .agreement_level import AgreementLevel
from .agreement_additional_costs import AgreementAdditionalCosts
from .contribution_rule import ContributionRule, ContributionMode, ContributionCategory
from .content_status import ContentStatus
from .checklist import Checklist, ChecklistItem
from .toolkit_template import ToolkitTemplate, TemplateField, TemplateFormat, FieldType
from .legal_source import LegalSource, LegalTag, LegalSourceVersion, LegalSourceType, legal_source_tags
from .service import Service
from .service_request import ServiceRequest, ServiceRequestStatus

__all__ = [
    'Base',
    'Agreement',
    'AgreementLevel',
    'AgreementAdditionalCosts',
    'ContributionRule',
    'ContributionMode',
    'ContributionCategory',
    'ContentStatus',
    'Checklist',
    'ChecklistItem',
    'ToolkitTemplate',
    'TemplateField',
    'TemplateFormat',
    'FieldType',
    'LegalSource',
    'LegalTag',
    'LegalSourceVersion',
    'LegalSourceType',
    'legal_source_tags',
    'Service',
    'ServiceRequest',
    'ServiceRequestStatus',
]
