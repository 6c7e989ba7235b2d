"""Unit tests for the tag model and effective tag resolution."""

import libcst as cst
from libcst.helpers import ensure_type
import pytest

from handlergen.domain.entities import (
    HandlerPlan,
    MethodMarkers,
    OnCreateTag,
    PublishTag,
    PublishTarget,
)
from handlergen.domain.errors import ConflictingMarkersError


def _method(name: str) -> cst.FunctionDef:
    return ensure_type(cst.parse_statement(f"def {name}(self):\n    pass\n"), cst.FunctionDef)


class TestEffectiveTag:
    """Test blanket/method precedence."""

    def test_untagged_method_without_blanket_is_excluded(self) -> None:
        assert MethodMarkers("helper").effective_tag(None) is None

    def test_blanket_applies_to_untagged_method(self) -> None:
        blanket = PublishTag(package="bank")
        assert MethodMarkers("send").effective_tag(blanket) is blanket

    def test_method_tag_replaces_blanket_without_merging(self) -> None:
        own = PublishTag(name="balance_of")
        tag = MethodMarkers("balance", publish=own).effective_tag(PublishTag(package="bank"))
        assert tag == PublishTag(package=None, name="balance_of")

    def test_on_create_overrides_blanket(self) -> None:
        tag = MethodMarkers("create", on_create=OnCreateTag()).effective_tag(PublishTag())
        assert isinstance(tag, OnCreateTag)

    def test_both_method_tags_conflict(self) -> None:
        markers = MethodMarkers("create", publish=PublishTag(), on_create=OnCreateTag())
        with pytest.raises(ConflictingMarkersError) as excinfo:
            markers.effective_tag(None)
        assert excinfo.value.node_name == "create"
        assert "must not be attached to the same function" in str(excinfo.value)


class TestHandlerPlan:
    """Test plan accessors."""

    def test_initializer_and_published_split(self) -> None:
        create = PublishTarget(method=_method("create"), tag=OnCreateTag())
        get = PublishTarget(method=_method("get"), tag=PublishTag())
        plan = HandlerPlan(handler="Counter", targets=(create, get))
        assert plan.initializer is create
        assert plan.published == (get,)
        assert create.is_initializer
        assert get.name == "get"
