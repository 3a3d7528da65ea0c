"""
blockvars - Variable namespaces and type reconciliation for block documents

Resolves variable identity across a document's committed and preview
namespaces, generates fresh variable names, and reconciles the type claims
made by every block into one type per variable.
"""

__version__ = "0.1.0"

# Configuration is available at top level for convenience
from blockvars.config import config

__all__ = ["config", "__version__"]
