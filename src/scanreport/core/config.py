"""Formatting configuration for the table writer.

Values are read once from the environment and then bound into each
renderer at construction time; nothing mutates them afterwards.

Provides:
- TableConfig: Pydantic model with all formatting constants
- load_config: Factory function to create TableConfig instance
"""

import os

from pydantic import BaseModel, ConfigDict, Field


class TableConfig(BaseModel):
    """Formatting constants for tables and the origin graph.

    Attributes:
        max_column_width: Cap for free-text columns (TITLE, CHECK, MESSAGE)
        message_min_width: Minimum content width of the MESSAGE column
        title_word_limit: Titles with this many words or more are shortened
        ellipsis: Marker appended to shortened text
        link_prefix: Indicator placed before reference links
        graph_heading: Heading line of the origin graph section
    """

    model_config = ConfigDict(frozen=True)

    max_column_width: int = Field(
        default_factory=lambda: int(os.getenv("SCANREPORT_MAX_COLUMN_WIDTH", "80"))
    )
    message_min_width: int = Field(default=40)
    title_word_limit: int = Field(default=12)

    ellipsis: str = Field(default="...")
    link_prefix: str = Field(default="-->")
    graph_heading: str = Field(default="Vulnerability origin graph:")


def load_config() -> TableConfig:
    """Load formatting configuration from the environment.

    Returns:
        Populated TableConfig instance
    """
    return TableConfig()
