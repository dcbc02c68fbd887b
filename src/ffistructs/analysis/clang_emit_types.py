from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


class ShapeError(ValueError):
    """The provider returned a tree shape this pipeline does not handle."""

    def __init__(self, message: str, node: Optional[str] = None, kind: Optional[str] = None) -> None:
        self.node = node
        self.kind = kind
        self.detail = message
        super().__init__(self.describe())

    def describe(self, name: Optional[str] = None) -> str:
        """Format the error, leaving out ``node`` when it is already ``name``."""
        parts = []
        if self.node and self.node != name:
            parts.append(self.node)
        if self.kind:
            parts.append(f"[{self.kind}]")
        prefix = " ".join(parts)
        return f"{prefix}: {self.detail}" if prefix else self.detail


class UnsupportedTypeError(ShapeError):
    pass


class ParseError(RuntimeError):
    pass


@dataclass
class FieldInfo:
    name: str
    type_token: str
    offset: int
    doc: Optional[str] = None


@dataclass
class StructDecl:
    name: str
    size: int
    fields: list[FieldInfo]
    doc: Optional[str] = None


@dataclass
class EnumConstant:
    name: str
    value: int
    doc: Optional[str] = None


@dataclass
class EnumDecl:
    name: str
    integer_type: str
    constants: list[EnumConstant]
    doc: Optional[str] = None


@dataclass
class DeclarationBuckets:
    structs: list = field(default_factory=list)
    typedefs: list = field(default_factory=list)
    functions: list = field(default_factory=list)
    enums: list = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "struct": len(self.structs),
            "typedef": len(self.typedefs),
            "function": len(self.functions),
            "enum": len(self.enums),
        }


@dataclass
class GenerationResult:
    blocks: list[str] = field(default_factory=list)
    failures: list[tuple[str, str]] = field(default_factory=list)
