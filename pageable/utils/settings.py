"""Process-wide settings for page requests, page walking and payload parsing."""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from pageable.utils.exceptions import InvalidArgument
from pageable.utils.types import ITEMS_NODE, LINKS_NODE, PAGING_NODE

logger = logging.getLogger(__name__)


class PageableSettings(BaseModel):
    """Validated configuration values.

    Attributes:
        default_limit: Page size used by PageRequest when none is given
        max_limit: Upper bound for page sizes accepted from clients
        max_pages: Default cap for page walks, None for unbounded
        items_node: Payload key holding the page items
        paging_node: Payload key holding the paging descriptor
        links_node: Payload key holding the link mapping
    """

    model_config = {"frozen": True, "extra": "forbid"}

    default_limit: int = Field(default=100, ge=1)
    max_limit: int = Field(default=1000, ge=1)
    max_pages: Optional[int] = Field(default=None, ge=1)
    items_node: str = Field(default=ITEMS_NODE, min_length=1)
    paging_node: str = Field(default=PAGING_NODE, min_length=1)
    links_node: str = Field(default=LINKS_NODE, min_length=1)

    @model_validator(mode="after")
    def _check_limits(self) -> PageableSettings:
        if self.default_limit > self.max_limit:
            raise ValueError("default_limit must not exceed max_limit")
        return self


_settings = PageableSettings()


def get_settings() -> PageableSettings:
    """Return the active settings."""
    return _settings


def configure(**overrides: Any) -> PageableSettings:
    """Replace selected settings and return the new settings.

    Args:
        **overrides: Field names of PageableSettings with their new values

    Returns:
        The settings now in effect

    Raises:
        InvalidArgument: If a field is unknown or a value fails validation
    """
    global _settings

    try:
        updated = PageableSettings.model_validate({**_settings.model_dump(), **overrides})
    except ValidationError as e:
        raise InvalidArgument(f"Invalid settings: {e}") from e

    logger.debug("Settings updated: %s", overrides)
    _settings = updated
    return _settings


def reset_settings() -> PageableSettings:
    """Restore the default settings."""
    global _settings
    _settings = PageableSettings()
    return _settings
