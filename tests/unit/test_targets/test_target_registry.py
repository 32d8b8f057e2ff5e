"""Unit tests for the crawl target registry."""

import pytest

from simcrawl.models import RawRecord
from simcrawl.targets import (
    CrawlTarget,
    PlagiumTarget,
    TargetSelectors,
    available_targets,
    get_target,
    register_target,
)


class TestGetTarget:
    """Tests for get_target factory function."""

    def test_default_is_plagium(self):
        assert isinstance(get_target(), PlagiumTarget)

    def test_lookup_is_case_insensitive(self):
        assert isinstance(get_target("PLAGIUM"), PlagiumTarget)

    def test_returns_new_instance(self):
        assert get_target("plagium") is not get_target("plagium")

    def test_unknown_target(self):
        with pytest.raises(ValueError) as exc_info:
            get_target("nonexistent")
        assert "Unknown crawl target" in str(exc_info.value)


class TestRegisterTarget:
    """Tests for register_target."""

    def test_register_and_list(self):
        @register_target
        class EchoTarget(CrawlTarget):
            name = "echo-test"
            url = "https://echo.invalid/"
            selectors = TargetSelectors("#in", "#go", "#msg", ".hit")
            no_match_phrase = "nothing"

            def parse_result(self, element):
                return RawRecord(title=element.get_text())

        assert isinstance(get_target("echo-test"), EchoTarget)
        names = [target.name for target in available_targets()]
        assert "echo-test" in names
        assert names == sorted(names)

    def test_reregistering_same_class_is_allowed(self):
        assert register_target(PlagiumTarget) is PlagiumTarget

    def test_duplicate_name_rejected(self):
        class OtherPlagium(PlagiumTarget):
            pass

        with pytest.raises(ValueError):
            register_target(OtherPlagium)

    def test_missing_name_rejected(self):
        class Nameless(PlagiumTarget):
            name = ""

        with pytest.raises(ValueError):
            register_target(Nameless)

    def test_cannot_instantiate_abstract_target(self):
        with pytest.raises(TypeError):
            CrawlTarget()
