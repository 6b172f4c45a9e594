"""Profile-guided storage optimization analysis for message schemas."""

from protoprofile.analysis import (
    FieldAnalysis,
    FieldClassifier,
    Optimization,
    OptimizationDecider,
    Scale,
)
from protoprofile.config import AnalyzeOptions, ThresholdConfig
from protoprofile.errors import (
    ConfigError,
    PatternError,
    ProfileLoadError,
    ProfileNotFoundError,
    ProfileParseError,
    ProtoProfileError,
    SchemaError,
)
from protoprofile.layout import DefaultStringLayout, StringLayout
from protoprofile.models import (
    EnumSchema,
    FieldSchema,
    MessageSchema,
    SchemaDocument,
    load_schema_from_yaml,
    save_schema_to_yaml,
)
from protoprofile.profiling import (
    AccessInfo,
    AccessInfoLoader,
    AccessKind,
    AccessStats,
    FieldAccessInfo,
    MessageAccessInfo,
    load_access_info,
)
from protoprofile.registry import FieldDefinition, TypeDefinition, TypeRegistry
from protoprofile.report import (
    FieldReport,
    MessageReport,
    ProfileReport,
    analyze_profile,
    analyze_profile_to_text,
    compile_filter,
    render_text,
    report_to_dict,
    type_label,
)
from protoprofile.resolver import NameResolver, find_boundary
from protoprofile.type_mappings import FieldKind, map_to_field_kind

__version__ = "0.1.0"

__all__ = [
    "AccessInfo",
    "AccessInfoLoader",
    "AccessKind",
    "AccessStats",
    "AnalyzeOptions",
    "ConfigError",
    "DefaultStringLayout",
    "EnumSchema",
    "FieldAccessInfo",
    "FieldAnalysis",
    "FieldClassifier",
    "FieldDefinition",
    "FieldKind",
    "FieldReport",
    "FieldSchema",
    "MessageAccessInfo",
    "MessageReport",
    "MessageSchema",
    "NameResolver",
    "Optimization",
    "OptimizationDecider",
    "PatternError",
    "ProfileLoadError",
    "ProfileNotFoundError",
    "ProfileParseError",
    "ProfileReport",
    "ProtoProfileError",
    "Scale",
    "SchemaDocument",
    "SchemaError",
    "StringLayout",
    "ThresholdConfig",
    "TypeDefinition",
    "TypeRegistry",
    "analyze_profile",
    "analyze_profile_to_text",
    "compile_filter",
    "find_boundary",
    "load_access_info",
    "load_schema_from_yaml",
    "map_to_field_kind",
    "render_text",
    "report_to_dict",
    "save_schema_to_yaml",
    "type_label",
]
