"""Data models for registry components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from custom_ui.errors import RegistryError


class FileType(Enum):
    COMPONENT = "component"
    UTILITY = "utility"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "FileType":
        # "type" marks type-declaration files in older registries
        if value == "type":
            return cls.OTHER
        return cls(value)


@dataclass(frozen=True)
class ComponentFile:
    path: str
    content: str
    type: FileType = FileType.OTHER

    @classmethod
    def from_dict(
        cls, data: Any, where: str, default_type: FileType | None = None
    ) -> "ComponentFile":
        if not isinstance(data, dict):
            raise RegistryError(f"Invalid file in {where}: must be an object")

        required = ["path", "content"] if default_type else ["path", "content", "type"]
        for field_name in required:
            if field_name not in data:
                raise RegistryError(
                    f"Invalid file in {where}: missing field '{field_name}'"
                )
        for field_name in ("path", "content"):
            if not isinstance(data[field_name], str):
                raise RegistryError(
                    f"Invalid file in {where}: '{field_name}' must be a string"
                )

        if "type" in data:
            try:
                file_type = FileType.parse(data["type"])
            except ValueError:
                valid = ", ".join(t.value for t in FileType)
                raise RegistryError(
                    f"Invalid file in {where}: type must be one of {valid}"
                )
        else:
            file_type = default_type or FileType.OTHER

        return cls(path=data["path"], content=data["content"], type=file_type)

    def to_dict(self) -> dict:
        return {"path": self.path, "content": self.content, "type": self.type.value}


@dataclass
class ComponentRecord:
    name: str
    description: str
    dependencies: list[str] = field(default_factory=list)
    npm_dependencies: list[str] = field(default_factory=list)
    files: list[ComponentFile] = field(default_factory=list)
    utils: list[ComponentFile] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)

    @property
    def primary_file(self) -> ComponentFile | None:
        return next((f for f in self.files if f.type == FileType.COMPONENT), None)

    @property
    def auxiliary_files(self) -> list[ComponentFile]:
        primary = self.primary_file
        return [f for f in self.files if f is not primary]

    @classmethod
    def from_dict(cls, key: str, data: Any) -> "ComponentRecord":
        """Build a record from a raw registry entry.

        Raises:
            RegistryError: With the component key and field named.
        """
        if not isinstance(data, dict):
            raise RegistryError(f"Invalid component {key}: must be an object")

        for field_name in ("name", "description", "dependencies", "files", "npmDependencies"):
            if field_name not in data:
                raise RegistryError(
                    f"Invalid component {key}: missing field '{field_name}'"
                )

        for field_name in ("dependencies", "files", "npmDependencies"):
            if not isinstance(data[field_name], list):
                raise RegistryError(
                    f"Invalid component {key}: {field_name} must be an array"
                )

        for field_name in ("utils", "examples"):
            if field_name in data and not isinstance(data[field_name], list):
                raise RegistryError(
                    f"Invalid component {key}: {field_name} must be an array"
                )

        files = [
            ComponentFile.from_dict(f, f"{key}.files[{i}]")
            for i, f in enumerate(data["files"])
        ]
        if not any(f.type == FileType.COMPONENT for f in files):
            raise RegistryError(
                f"Invalid component {key}: no file of type 'component'"
            )

        utils = [
            ComponentFile.from_dict(u, f"{key}.utils[{i}]", FileType.UTILITY)
            for i, u in enumerate(data.get("utils", []))
        ]

        return cls(
            name=data["name"],
            description=data["description"],
            dependencies=[str(d) for d in data["dependencies"]],
            npm_dependencies=[str(d) for d in data["npmDependencies"]],
            files=files,
            utils=utils,
            examples=[str(e) for e in data.get("examples", [])],
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "dependencies": list(self.dependencies),
            "npmDependencies": list(self.npm_dependencies),
            "files": [f.to_dict() for f in self.files],
            "utils": [u.to_dict() for u in self.utils],
            "examples": list(self.examples),
        }


@dataclass
class UtilityEntry:
    name: str
    path: str
    content: str
    description: str


@dataclass
class Registry:
    components: dict[str, ComponentRecord] = field(default_factory=dict)
    utils: dict[str, UtilityEntry] = field(default_factory=dict)
    version: str | None = None


__all__ = [
    "FileType",
    "ComponentFile",
    "ComponentRecord",
    "UtilityEntry",
    "Registry",
]
