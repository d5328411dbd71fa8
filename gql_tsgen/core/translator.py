"""Translator protocol for turning IR into type declarations.

A translator is a visitor over the closed set of IR nodes: each node's
``translate`` calls back into exactly one ``translate_*`` method here.
Adding an output language means subclassing :class:`Translator`; adding a
node kind means adding one abstract method.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from . import ir


class TranslationError(ValueError):
    """Raised when the IR breaks an invariant the translator relies on."""


class TranslatorOptions(BaseModel):
    """Generation-wide settings, fixed when the translator is built.

    Example:
        options = TranslatorOptions(experimental_internal_enum_value_support=True)
        options = TranslatorOptions.model_validate(
            {"__experimentalInternalEnumValueSupport": True}
        )
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    # Emit "<Enum>External" literal unions and let the internal value be anything.
    experimental_internal_enum_value_support: bool = Field(
        default=False, alias="__experimentalInternalEnumValueSupport"
    )

    @classmethod
    def from_file(cls, path: str | Path) -> TranslatorOptions:
        """Load options from a JSON file."""
        with open(path) as f:
            return cls.model_validate(json.load(f))


class Translator(ABC):
    """Base class for IR translators."""

    def __init__(self, options: TranslatorOptions | None = None):
        self.options = options or TranslatorOptions()

    @abstractmethod
    def generate(
        self,
        objects: Sequence[ir.IRObjectDefinition],
        enums: Sequence[ir.IREnumDefinition],
        scalars: Sequence[ir.IRScalarDefinition],
    ) -> str:
        """Render a complete declaration file for the given definitions."""

    def generate_schema(self, schema: ir.IRSchema) -> str:
        """Shortcut for ``generate`` over a parsed :class:`IRSchema`."""
        return self.generate(schema.objects, schema.enums, schema.scalars)

    # Types

    @abstractmethod
    def translate_description(self, t: ir.IRDescription) -> str: ...

    @abstractmethod
    def translate_named_type(self, t: ir.IRNamedType, nullable: bool) -> str: ...

    @abstractmethod
    def translate_non_null_type(self, t: ir.IRNonNullType) -> str: ...

    @abstractmethod
    def translate_list_type(self, t: ir.IRListType, nullable: bool) -> str: ...

    @abstractmethod
    def translate_compound_type(self, t: ir.IRCompoundType) -> str: ...

    # Definitions

    @abstractmethod
    def translate_argument_definition(self, t: ir.IRArgumentDefinition) -> str: ...

    @abstractmethod
    def translate_resolver_definition(self, t: ir.IRResolverDefinition) -> str: ...

    @abstractmethod
    def translate_field_definition(self, t: ir.IRFieldDefinition) -> str: ...

    @abstractmethod
    def translate_object_definition(self, t: ir.IRObjectDefinition) -> str: ...

    @abstractmethod
    def translate_entity_definition(self, t: ir.IREntityDefinition) -> str: ...

    @abstractmethod
    def translate_enum_definition(self, t: ir.IREnumDefinition) -> str: ...

    @abstractmethod
    def translate_scalar_definition(self, t: ir.IRScalarDefinition) -> str: ...
