from .cleaner import clean_ranking, safe_nullable_number, safe_parse_float
from .enricher import enrich
from .loader import CampaignPayloadLoader
from .transformer import FieldRegistry, MetricTransformer, load_field_registry, transform

__all__ = [
    "CampaignPayloadLoader",
    "FieldRegistry",
    "MetricTransformer",
    "clean_ranking",
    "enrich",
    "load_field_registry",
    "safe_nullable_number",
    "safe_parse_float",
    "transform",
]
