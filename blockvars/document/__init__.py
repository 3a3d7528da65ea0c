"""
Document-side contracts: usage sites, their capabilities, and collection
of variable uses and type claims across a document.
"""

from .usage import (
    Document,
    HasDeveloperVariables,
    HasProcedureSignature,
    HasTypeHypotheses,
    HasVariableModels,
    HasVariableUses,
    InitializesVariable,
    LegacyDeveloperVariables,
    StaticDocument,
    StaticUsageSite,
    UsageSite,
    WarningRegistry,
    all_developer_variables,
    all_used_variable_models,
    all_variable_names,
    all_variable_types,
    collect_type_hypotheses,
    local_context,
    resolve_variable_references,
    usage_sites,
)

__all__ = [
    # Sites and documents
    "Document",
    "UsageSite",
    "StaticDocument",
    "StaticUsageSite",
    # Capabilities
    "HasDeveloperVariables",
    "HasProcedureSignature",
    "HasTypeHypotheses",
    "HasVariableModels",
    "HasVariableUses",
    "InitializesVariable",
    "LegacyDeveloperVariables",
    # Collection
    "WarningRegistry",
    "all_developer_variables",
    "all_used_variable_models",
    "all_variable_names",
    "all_variable_types",
    "collect_type_hypotheses",
    "local_context",
    "resolve_variable_references",
    "usage_sites",
]
