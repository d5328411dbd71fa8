"""Core modules for GraphQL resolver type generation."""

from .auth import ApiKeyAuth, Auth, BearerAuth, HeaderAuth, NoAuth
from .fetcher import GraphQLError, ServiceSDLFetcher
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .ir import (
    IRArgumentDefinition,
    IRCompoundType,
    IRDescription,
    IREntityDefinition,
    IREnumDefinition,
    IRFieldDefinition,
    IRListType,
    IRNamedType,
    IRNonNullType,
    IRObjectDefinition,
    IRResolverDefinition,
    IRScalarDefinition,
    IRSchema,
)
from .parser import SchemaParseError, SchemaParser
from .translator import TranslationError, Translator, TranslatorOptions
from .typescript import TypeScriptTranslator

__all__ = [
    # Auth
    "Auth",
    "ApiKeyAuth",
    "BearerAuth",
    "HeaderAuth",
    "NoAuth",
    # Fetching
    "GraphQLError",
    "ServiceSDLFetcher",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterTypesHook",
    "HookRunner",
    # IR
    "IRArgumentDefinition",
    "IRCompoundType",
    "IRDescription",
    "IREntityDefinition",
    "IREnumDefinition",
    "IRFieldDefinition",
    "IRListType",
    "IRNamedType",
    "IRNonNullType",
    "IRObjectDefinition",
    "IRResolverDefinition",
    "IRScalarDefinition",
    "IRSchema",
    # Parser
    "SchemaParseError",
    "SchemaParser",
    # Translation
    "TranslationError",
    "Translator",
    "TranslatorOptions",
    "TypeScriptTranslator",
]
