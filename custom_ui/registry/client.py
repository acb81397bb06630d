"""Retrying adapter between the installer and the registry loader.

Every registry call made by the installer goes through ``with_retry``: up to
``MAX_RETRIES`` attempts with a linear backoff of ``delay * attempt`` seconds.
All exceptions are retried the same way; after the last attempt the failure
surfaces as a ``NETWORK_ERROR`` carrying the attempt count.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from custom_ui.errors import CLIError, ErrorCode, create_error, handle_network_error
from custom_ui.feedback import Feedback

from .loader import RegistryLoader
from .models import ComponentRecord

MAX_RETRIES = 3
RETRY_DELAY = 1.0

T = TypeVar("T")

_logging = logging.getLogger(__name__)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    context: dict[str, Any] | None = None,
    max_retries: int = MAX_RETRIES,
    delay: float = RETRY_DELAY,
) -> T:
    """Run ``operation`` until it succeeds or ``max_retries`` attempts fail.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        context: Extra fields attached to the final error
        max_retries: Total number of attempts
        delay: Base delay; attempt N failing waits ``delay * N`` seconds

    Returns:
        Whatever the first successful attempt returned

    Raises:
        CLIError: NETWORK_ERROR with ``context["attempts"] == max_retries``
        ValueError: If ``max_retries`` is less than 1
    """
    if max_retries < 1:
        raise ValueError("max_retries must be at least 1")

    context = context or {}
    last_error: Exception

    for attempt in range(1, max_retries + 1):
        try:
            return await operation()
        except Exception as e:
            last_error = e
            _logging.debug(
                f"Registry attempt {attempt}/{max_retries} failed: {type(e).__name__}: {e}"
            )
            if attempt == max_retries:
                break
            await asyncio.sleep(delay * attempt)

    raise handle_network_error(
        last_error, {**context, "attempts": max_retries}
    ) from last_error


class RegistryClient:
    """Registry lookups with retry and not-found handling."""

    def __init__(
        self,
        loader: RegistryLoader,
        max_retries: int = MAX_RETRIES,
        delay: float = RETRY_DELAY,
    ):
        self.loader = loader
        self.max_retries = max_retries
        self.delay = delay

    async def get_component(self, name: str) -> ComponentRecord:
        """Fetch one component; a missing component is COMPONENT_NOT_FOUND."""
        component = await with_retry(
            lambda: self.loader.get_component(name),
            {"componentName": name},
            max_retries=self.max_retries,
            delay=self.delay,
        )
        if component is None:
            raise create_error(
                ErrorCode.COMPONENT_NOT_FOUND,
                f"Component '{name}' not found in registry",
                {"componentName": name},
            )
        return component

    async def get_all_components(self) -> dict[str, ComponentRecord]:
        return await with_retry(
            self.loader.get_all_components,
            {"operation": "fetch all components"},
            max_retries=self.max_retries,
            delay=self.delay,
        )

    async def get_all_components_or_empty(
        self, feedback: Feedback
    ) -> dict[str, ComponentRecord]:
        """Catalog fetch for listing/documentation; failures degrade to ``{}``."""
        try:
            return await self.get_all_components()
        except CLIError as e:
            feedback.warning(f"Could not load component registry: {e.message}")
            return {}


__all__ = [
    "MAX_RETRIES",
    "RETRY_DELAY",
    "with_retry",
    "RegistryClient",
]
