import types
import unittest

import pytest

from annalist.annotations import (
    REGISTRY,
    AnnotationResolver,
    ClassMetadataProvider,
    Marker,
    MarkerRegistry,
    MarkerKind,
    MappingMetadataProvider,
    Tag,
    as_provider,
    issue,
    mark,
    marker_kind,
    pending,
    title,
    with_tag,
)
from annalist.annotations.markers import (
    IGNORE,
    ISSUE,
    PYTEST_IGNORE,
    TITLE,
    UNITTEST_IGNORE,
    markers_of,
)


class FrameworkStory:

    @unittest.skip("flaky on CI")
    def skipped_by_unittest(self):
        pass

    @pytest.mark.skip(reason="not implemented")
    def skipped_by_pytest(self):
        pass

    @pytest.mark.usefixtures("tmp_path")
    def only_using_fixtures(self):
        pass

    @staticmethod
    @title("Static helper")
    def static_helper():
        pass


def test_tag_parsing() -> None:
    assert Tag.parse("epic:Checkout") == Tag(name="Checkout", type="epic")
    assert Tag.parse("Checkout") == Tag(name="Checkout", type="feature")
    assert Tag.parse(" epic : Checkout flow ") == Tag(name="Checkout flow", type="epic")
    assert str(Tag("Checkout", "epic")) == "epic:Checkout"


def test_with_tag_accepts_keywords() -> None:
    @with_tag(name="Payments", type="capability")
    def paying():
        pass

    assert markers_of(paying)[0].value == Tag("Payments", "capability")


def test_with_tag_requires_a_name() -> None:
    with pytest.raises(TypeError):
        with_tag()


def test_markers_keep_source_order() -> None:
    @title("First")
    @issue("SECOND-1")
    @pending
    def decorated():
        pass

    assert [marker.kind for marker in markers_of(decorated)] == [TITLE, ISSUE, marker_kind("Pending")]


def test_generic_mark_with_custom_kind() -> None:
    owner = marker_kind("Owner", namespace="team")

    @mark(owner, "payments-team")
    def owned():
        pass

    record = ClassMetadataProvider(types.SimpleNamespace(owned=owned)).method_metadata("owned")
    assert record.value_of(owner) == "payments-team"


def test_registry_keys_kinds_by_name() -> None:
    registry = MarkerRegistry()
    first = registry.register(MarkerKind("Ignore", "junit4"))
    second = registry.register(MarkerKind("Ignore", "junit5"))
    registry.register(MarkerKind("Ignore", "junit4"))

    assert registry.kinds_named("Ignore") == (first, second)
    assert registry.kinds_named("Unknown") == ()


def test_unittest_skip_becomes_an_ignore_marker() -> None:
    record = ClassMetadataProvider(FrameworkStory).method_metadata("skipped_by_unittest")
    assert record.has(UNITTEST_IGNORE)
    assert record.value_of(UNITTEST_IGNORE) == "flaky on CI"
    assert AnnotationResolver.method_is_ignored(record)
    assert not record.has(IGNORE)


def test_pytest_skip_mark_becomes_an_ignore_marker() -> None:
    record = ClassMetadataProvider(FrameworkStory).method_metadata("skipped_by_pytest")
    assert record.value_of(PYTEST_IGNORE) == "not implemented"

    other = ClassMetadataProvider(FrameworkStory).method_metadata("only_using_fixtures")
    assert not AnnotationResolver.method_is_ignored(other)


def test_static_methods_are_unwrapped() -> None:
    record = ClassMetadataProvider(FrameworkStory).method_metadata("static_helper")
    assert record.value_of(TITLE) == "Static helper"


def test_modules_can_be_test_types() -> None:
    module = types.ModuleType("checkout_scenarios")

    @title("Pay by card")
    def pay_by_card():
        pass

    module.pay_by_card = pay_by_card
    provider = ClassMetadataProvider(module)
    assert provider.name == "checkout_scenarios"
    assert provider.method_metadata("pay_by_card").value_of(TITLE) == "Pay by card"


def test_as_provider() -> None:
    explicit = MappingMetadataProvider("Explicit")
    assert as_provider(None) is None
    assert as_provider(explicit) is explicit
    assert isinstance(as_provider(FrameworkStory), ClassMetadataProvider)


def test_ignore_kinds_count_once_registered() -> None:
    adhoc_ignore = MarkerKind("Ignore", namespace="adhoc")
    record = MappingMetadataProvider("Adhoc", methods={"test_x": [Marker(adhoc_ignore)]}).method_metadata("test_x")
    assert not AnnotationResolver.method_is_ignored(record)

    REGISTRY.register(adhoc_ignore)
    assert AnnotationResolver.method_is_ignored(record)
