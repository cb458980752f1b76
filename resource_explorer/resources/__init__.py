"""
Resource Model - Forest of RESTful resources inferred from OpenAPI paths.

Supports:
- Path classification into resource chains
- Grouping, list-endpoint qualification and hierarchy assembly
- Identifier field inference
- Statistics over the resource forest
"""

from .graph_builder import ResourceGraphBuilder
from .identifier import IdentifierInferencer, singularize
from .models import DocumentInfo, ResourceInfo, ResourceOperation, ResourceStatistics
from .path_classifier import PathClassifier, build_path, extract_param_names, extract_path_params
from .response_data import ExtractedData, extract_data_from_object, has_pagination_info
from .statistics import collect_statistics

__all__ = [
    "ResourceGraphBuilder",
    "IdentifierInferencer",
    "singularize",
    "DocumentInfo",
    "ResourceInfo",
    "ResourceOperation",
    "ResourceStatistics",
    "PathClassifier",
    "build_path",
    "extract_param_names",
    "extract_path_params",
    "ExtractedData",
    "extract_data_from_object",
    "has_pagination_info",
    "collect_statistics",
]
