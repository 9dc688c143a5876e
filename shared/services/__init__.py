"""Shared services package."""

from .cost_calculator import CostCalculation, CostCalculationError, calculate_cost
from .comparison import ComparisonSide, ComparisonResult, ComparisonError, compare
from .share_link import SharedComparisonParams, ShareLinkError, encode_share_params, decode_share_params
from .template_render import RenderResult, extract_placeholders, render_template
from .request_workflow import RequestTransitionError, can_transition, ensure_transition

__all__ = [
    'CostCalculation',
    'CostCalculationError',
    'calculate_cost',
    'ComparisonSide',
    'ComparisonResult',
    'ComparisonError',
    'compare',
    'SharedComparisonParams',
    'ShareLinkError',
    'encode_share_params',
    'decode_share_params',
    'RenderResult',
    'extract_placeholders',
    'render_template',
    'RequestTransitionError',
    'can_transition',
    'ensure_transition',
]
