"""Component registry loading.

The registry is a JSON document read from the bundled ``registry.json``, a
local file, or an ``http(s)://`` URL. It is parsed and validated once per
loader instance and cached for the lifetime of that instance.

Cache Invalidation:
- ``clear_cache()`` forces the next lookup to read the source again
- Tests build a fresh loader per case instead of sharing one
"""

import json
import logging
from pathlib import Path

import httpx

from custom_ui.errors import CLIError, ErrorCode, RegistryError
from custom_ui.paths import get_registry_source

from .models import ComponentRecord, Registry, UtilityEntry

HTTP_TIMEOUT = 30.0

_logging = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


def parse_registry(data: object) -> Registry:
    """Validate a raw registry document and convert it to models.

    Raises:
        RegistryError: If the structure or any component is invalid.
    """
    if not isinstance(data, dict):
        raise RegistryError("Invalid registry structure: must be an object")

    components_data = data.get("components")
    if not isinstance(components_data, dict):
        raise RegistryError("Invalid registry structure: missing components object")

    utils_data = data.get("utils", {})
    if not isinstance(utils_data, dict):
        raise RegistryError("Invalid registry structure: utils must be an object")

    components = {
        key: ComponentRecord.from_dict(key, value)
        for key, value in components_data.items()
    }

    utils = {}
    for name, util in utils_data.items():
        if not isinstance(util, dict):
            raise RegistryError(f"Invalid util {name}: must be an object")
        for field_name in ("path", "content", "description"):
            if field_name not in util:
                raise RegistryError(
                    f"Invalid util {name}: missing field '{field_name}'"
                )
        utils[name] = UtilityEntry(
            name=name,
            path=util["path"],
            content=util["content"],
            description=util["description"],
        )

    version = data.get("version")
    return Registry(
        components=components,
        utils=utils,
        version=str(version) if version is not None else None,
    )


class RegistryLoader:
    def __init__(self, source: str | Path | None = None):
        self.source = str(source) if source is not None else get_registry_source()
        self._cached: Registry | None = None

    async def _read_source(self) -> str:
        if _is_url(self.source):
            _logging.debug(f"Fetching registry from {self.source}")
            try:
                async with httpx.AsyncClient(
                    timeout=httpx.Timeout(HTTP_TIMEOUT, connect=10.0),
                    follow_redirects=True,
                ) as client:
                    response = await client.get(self.source)
                    response.raise_for_status()
                    return response.text
            except httpx.HTTPError as e:
                raise CLIError(
                    f"Failed to fetch registry from {self.source}: {e}",
                    ErrorCode.NETWORK_ERROR,
                    ["Check your internet connection", "Verify the registry URL"],
                    {"registry": self.source},
                ) from e

        path = Path(self.source)
        _logging.debug(f"Reading registry from {path}")
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise CLIError(
                "Registry file not found",
                ErrorCode.NETWORK_ERROR,
                ["Ensure the registry.json file exists", "Try reinstalling the package"],
                {"registry": self.source},
            ) from e

    async def load_registry(self) -> Registry:
        if self._cached is not None:
            return self._cached

        text = await self._read_source()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise RegistryError(
                "Invalid registry JSON format",
                ["Check the registry.json file for syntax errors"],
                {"registry": self.source, "originalError": str(e)},
            ) from e

        registry = parse_registry(data)
        _logging.debug(
            f"Loaded {len(registry.components)} component(s) from {self.source}"
        )
        self._cached = registry
        return registry

    async def get_component(self, name: str) -> ComponentRecord | None:
        registry = await self.load_registry()
        return registry.components.get(name)

    async def get_all_components(self) -> dict[str, ComponentRecord]:
        registry = await self.load_registry()
        return registry.components

    async def get_component_names(self) -> list[str]:
        registry = await self.load_registry()
        return list(registry.components)

    async def get_utils(self) -> dict[str, UtilityEntry]:
        registry = await self.load_registry()
        return registry.utils

    def clear_cache(self) -> None:
        self._cached = None


__all__ = [
    "RegistryLoader",
    "parse_registry",
]
