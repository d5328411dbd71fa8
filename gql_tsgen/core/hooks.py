"""Generation hooks for customizing code generation.

Pre-generation hooks transform the parsed IRSchema before translation;
post-generation hooks transform the rendered declaration file before it is
written.

Example usage:
    from gql_tsgen.core.hooks import HookRunner, FilterTypesHook, AddHeaderHook

    runner = HookRunner()
    runner.add_pre_hook(FilterTypesHook(exclude_prefix="_"))
    runner.add_post_hook(AddHeaderHook("/* eslint-disable */"))
"""

from dataclasses import replace
from typing import Protocol, runtime_checkable

from .ir import IRSchema


@runtime_checkable
class PreGenerateHook(Protocol):
    """Protocol for pre-generation hooks.

    Example:
        class DropSubscriptions:
            def pre_generate(self, ir: IRSchema) -> IRSchema:
                ir.objects = [o for o in ir.objects if o.name != "Subscription"]
                return ir
    """

    def pre_generate(self, ir: IRSchema) -> IRSchema:
        """Called before translation.

        Args:
            ir: The parsed schema

        Returns:
            The (possibly modified) IR to translate
        """
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for post-generation hooks."""

    def post_generate(self, filename: str, content: str) -> str:
        """Called with the rendered file before it's written.

        Args:
            filename: Name of the output file (e.g., "resolvers.d.ts")
            content: The generated declarations

        Returns:
            The (possibly transformed) content to write
        """
        ...


class AddHeaderHook:
    """Prepend a fixed header, e.g. a lint pragma, to the generated file."""

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        if not self.header.endswith("\n"):
            header = self.header + "\n\n"
        else:
            header = self.header + "\n"
        return header + content


class FilterTypesHook:
    """Drop objects, enums and scalars by name prefix/suffix.

    Example:
        # Remove all types starting with underscore
        hook = FilterTypesHook(exclude_prefix="_")
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def _should_include(self, name: str) -> bool:
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not name.endswith(self.include_suffix):
            return False
        return True

    def pre_generate(self, ir: IRSchema) -> IRSchema:
        """Return a copy of the IR without the filtered definitions."""
        return replace(
            ir,
            objects=[o for o in ir.objects if self._should_include(o.name)],
            enums=[e for e in ir.enums if self._should_include(e.name)],
            scalars=[s for s in ir.scalars if self._should_include(s.name)],
        )


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.pre_hooks: list[PreGenerateHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, ir: IRSchema) -> IRSchema:
        for hook in self.pre_hooks:
            ir = hook.pre_generate(ir)
        return ir

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
