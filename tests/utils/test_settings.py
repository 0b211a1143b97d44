import pytest
from pydantic import ValidationError

from pageable import InvalidArgument, PageableSettings, configure, get_settings, reset_settings
from pageable.utils.types import merge_params


class TestSettings:
    def test_defaults(self):
        settings = get_settings()
        assert settings.default_limit == 100
        assert settings.max_limit == 1000
        assert settings.max_pages is None
        assert (settings.items_node, settings.paging_node, settings.links_node) == (
            "items",
            "paging",
            "links",
        )

    def test_configure_overrides_selected_fields(self):
        updated = configure(default_limit=10, max_pages=5)
        assert updated is get_settings()
        assert updated.default_limit == 10
        assert updated.max_pages == 5
        assert updated.max_limit == 1000

    def test_reset(self):
        configure(default_limit=10)
        assert reset_settings() == PageableSettings()
        assert get_settings().default_limit == 100

    def test_unknown_field(self):
        with pytest.raises(InvalidArgument, match="Invalid settings"):
            configure(page_size=10)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"default_limit": 0},
            {"max_pages": 0},
            {"items_node": ""},
            {"default_limit": 50, "max_limit": 10},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(InvalidArgument):
            configure(**overrides)

    def test_failed_configure_keeps_previous(self):
        configure(default_limit=20)
        with pytest.raises(InvalidArgument):
            configure(default_limit=-1)
        assert get_settings().default_limit == 20

    def test_settings_are_frozen(self):
        with pytest.raises(ValidationError):
            get_settings().default_limit = 1


class TestMergeParams:
    def test_precedence(self):
        assert merge_params({"a": 1, "b": 1}, {"b": 2, "c": 2}, c=3) == {"a": 1, "b": 2, "c": 3}

    def test_none_inputs(self):
        assert merge_params() == {}
