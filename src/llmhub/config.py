"""Environment-driven configuration for llmhub.

Only process-level switches live here. Vendor credentials travel in
``ClientConfig`` or are read by the vendor SDKs themselves.
"""

from __future__ import annotations

import os

LLMHUB_ENABLE_CACHING_ENV = "LLMHUB_ENABLE_CACHING"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def resolve_enable_caching(enable_caching: bool | None = None) -> bool:
    """Decide whether the shared response cache is enabled.

    Resolution order:

    1. Explicit *enable_caching* parameter.
    2. ``LLMHUB_ENABLE_CACHING`` environment variable.
    3. Default: disabled.

    Raises:
        ValueError: If the environment variable is not a recognised boolean.
    """
    if enable_caching is not None:
        return enable_caching

    env_value = os.environ.get(LLMHUB_ENABLE_CACHING_ENV)
    if env_value is None:
        return False

    normalized = env_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False

    msg = f"Invalid {LLMHUB_ENABLE_CACHING_ENV} value {env_value!r}. Use true or false."
    raise ValueError(msg)
