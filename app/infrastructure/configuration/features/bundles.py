"""Translation bundle feature settings."""

from typing import Literal

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class BundleSettings(FeatureSettings):
    """Configuration for loading, writing and translating bundles.

    Environment Variables:
        BUNDLES_DEFAULT_FORMAT: Format for new resources when a bundle has
            none yet - 'yaml' or 'json' (default: yaml)
        BUNDLES_BATCH_SIZE: Keys per provider request (default: all keys in
            a single request)

    Example:
        ```python
        from infrastructure.configuration import settings

        fmt = settings.bundles.default_format
        batch_size = settings.bundles.batch_size
        ```
    """

    default_format: Literal["yaml", "json"] = Field(
        default="yaml",
        alias="BUNDLES_DEFAULT_FORMAT",
    )
    batch_size: int | None = Field(
        default=None,
        alias="BUNDLES_BATCH_SIZE",
        gt=0,
    )
