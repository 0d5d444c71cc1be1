"""Request normalization and itinerary pipeline."""

from .eta_pipeline import EtaPipeline, EtaResult
from .intent_parser import parse_freeform_query, normalize_request

__all__ = ["EtaPipeline", "EtaResult", "parse_freeform_query", "normalize_request"]
