"""
Processor registry tests

Ordering by priority, ties by registration order, reset and validation.
"""

import pytest

from docdown.lib.registry import ComponentRegistry, ProcessorRegistrationError
from docdown.models.context import ProcessingContext
from docdown.models.processors import DEFAULT_PRIORITY, ProcessorCategory, ProcessorSpec


def spec_make(name, priority=DEFAULT_PRIORITY, preprocess=None, postprocess=None):
    options = {}
    if preprocess is not None:
        options["preprocess"] = preprocess
    if postprocess is not None:
        options["postprocess"] = postprocess
    return ProcessorSpec(
        name=name,
        category=ProcessorCategory.INLINE,
        description=f"{name} processor",
        priority=priority,
        **options,
    )


def appender(suffix):
    return lambda text, context: text + suffix


class TestBuiltins:
    """Default registry"""

    def test_execution_order(self):
        """Built-ins sorted by priority, ties in registration order"""
        assert ComponentRegistry().names_list() == [
            "include",
            "variables",
            "snippet-import",
            "code-block-features",
            "code-annotation",
            "file-tree",
            "callout",
            "accordion",
            "steps",
            "cards",
            "code-group",
            "tabs",
            "badge",
            "code-block",
            "icon",
            "custom-anchor",
            "heading-anchor",
            "table-of-contents",
            "table-wrapper",
        ]

    def test_spec_get(self):
        """Lookup by name"""
        registry = ComponentRegistry()
        assert registry.spec_get("tabs").priority == 15
        assert registry.spec_get("nope") is None

    def test_without_builtins(self):
        """An empty registry is possible"""
        assert ComponentRegistry(builtins=False).names_list() == []


class TestOrdering:
    """Registration and ordering of custom processors"""

    def test_ties_keep_registration_order(self):
        """Stable sort on priority"""
        registry = ComponentRegistry(builtins=False)
        registry.register(spec_make("a", 5))
        registry.register(spec_make("b", 5))
        registry.register(spec_make("c", 1))
        assert registry.names_list() == ["c", "a", "b"]

    def test_default_priority_runs_late(self):
        """A spec without priority runs after earlier built-ins"""
        registry = ComponentRegistry()
        registry.register(spec_make("custom"))
        assert registry.names_list()[-1] == "custom"
        assert registry.spec_get("custom").priority == DEFAULT_PRIORITY

    def test_stages_chain(self):
        """Each stage receives the previous stage's output"""
        registry = ComponentRegistry(builtins=False)
        registry.register(spec_make("second", 2, preprocess=appender("2"), postprocess=appender("b")))
        registry.register(spec_make("first", 1, preprocess=appender("1"), postprocess=appender("a")))
        context = ProcessingContext()
        assert registry.preprocessors_run("", context) == "12"
        assert registry.postprocessors_run("", context) == "ab"

    def test_identity_defaults(self):
        """Unset stages pass text through"""
        registry = ComponentRegistry(builtins=False)
        registry.register(spec_make("noop"))
        assert registry.preprocessors_run("x", ProcessingContext()) == "x"

    def test_reset(self):
        """Reset empties the registry, built-ins included"""
        registry = ComponentRegistry()
        registry.reset()
        assert registry.names_list() == []
        registry.builtins_register()
        assert "tabs" in registry.names_list()


class TestValidation:
    """Programming errors raise immediately"""

    def test_not_a_spec(self):
        """Only ProcessorSpec instances are accepted"""
        with pytest.raises(ProcessorRegistrationError):
            ComponentRegistry(builtins=False).register("tabs")

    def test_non_integer_priority(self):
        """Priority must be an int"""
        with pytest.raises(ProcessorRegistrationError, match="non-integer priority"):
            ComponentRegistry(builtins=False).register(spec_make("x", "5"))

    def test_non_callable_stage(self):
        """Stages must be callable"""
        with pytest.raises(ProcessorRegistrationError, match="non-callable"):
            ComponentRegistry(builtins=False).register(spec_make("x", preprocess="nope"))

    def test_is_type_error(self):
        """Registration errors are TypeErrors"""
        assert issubclass(ProcessorRegistrationError, TypeError)
