"""Core scan report functionality.

Provides:
- Typed scan results (vulnerabilities and misconfigurations per target)
- Formatting configuration for the table writer
"""

from .config import TableConfig, load_config
from .models import (
    DependencyTreeItem,
    DetectedMisconfiguration,
    DetectedVulnerability,
    Finding,
    RenderOptions,
    Report,
    Result,
    Severity,
    Status,
)

__all__ = [
    "TableConfig",
    "load_config",
    "DependencyTreeItem",
    "DetectedMisconfiguration",
    "DetectedVulnerability",
    "Finding",
    "RenderOptions",
    "Report",
    "Result",
    "Severity",
    "Status",
]
