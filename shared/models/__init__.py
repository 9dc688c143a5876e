"""Shared models package."""

from .agreement_data import (
    LevelData,
    AdditionalCostsData,
    ContributionRuleData,
    AgreementData,
    resolve_contribution_mode,
    normalize_contribution_rule,
)

__all__ = [
    'LevelData',
    'AdditionalCostsData',
    'ContributionRuleData',
    'AgreementData',
    'resolve_contribution_mode',
    'normalize_contribution_rule',
]
