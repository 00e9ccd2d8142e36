"""Tests for fetch status and query mode."""

from catalogsync.domain.state_machines import FetchStatus, QueryKind, QueryMode


class TestFetchStatus:
    """Tests for FetchStatus state machine."""

    def test_idle_can_start_loading(self) -> None:
        """IDLE can transition to LOADING."""
        assert FetchStatus.IDLE.can_transition_to(FetchStatus.LOADING)

    def test_idle_cannot_succeed_directly(self) -> None:
        """IDLE cannot transition to SUCCEEDED without loading."""
        assert not FetchStatus.IDLE.can_transition_to(FetchStatus.SUCCEEDED)

    def test_loading_outcomes(self) -> None:
        """LOADING can succeed, fail, or be reissued."""
        assert set(FetchStatus.LOADING.allowed_transitions()) == {
            FetchStatus.LOADING,
            FetchStatus.SUCCEEDED,
            FetchStatus.FAILED,
        }

    def test_failed_can_retry(self) -> None:
        """FAILED can transition back to LOADING."""
        assert FetchStatus.FAILED.can_transition_to(FetchStatus.LOADING)
        assert not FetchStatus.FAILED.can_transition_to(FetchStatus.SUCCEEDED)

    def test_only_loading_is_unsettled(self) -> None:
        """Every status but LOADING is settled."""
        assert not FetchStatus.LOADING.is_settled()
        assert FetchStatus.IDLE.is_settled()
        assert FetchStatus.SUCCEEDED.is_settled()
        assert FetchStatus.FAILED.is_settled()


class TestQueryMode:
    """Tests for QueryMode tagged union."""

    def test_default_is_unfiltered(self) -> None:
        mode = QueryMode()
        assert mode.kind is QueryKind.UNFILTERED
        assert not mode.is_search
        assert not mode.is_filtered

    def test_text_dominates_category(self) -> None:
        """Search text wins over a selected category."""
        mode = QueryMode.from_inputs(text="phone", category="laptops")
        assert mode == QueryMode.search("phone")
        assert mode.is_search
        assert not mode.is_filtered

    def test_category_without_text(self) -> None:
        mode = QueryMode.from_inputs(text="", category="laptops")
        assert mode == QueryMode.category("laptops")
        assert mode.is_filtered

    def test_blank_inputs_are_unfiltered(self) -> None:
        """Whitespace-only inputs select the unfiltered listing."""
        assert QueryMode.from_inputs(text="   ", category=" ") == QueryMode.unfiltered()

    def test_search_is_not_paginated(self) -> None:
        assert not QueryMode.search("x").is_paginated
        assert QueryMode.category("x").is_paginated
        assert QueryMode.unfiltered().is_paginated

    def test_modes_compare_by_value(self) -> None:
        assert QueryMode.category("a") != QueryMode.category("b")
        assert QueryMode.category("a") == QueryMode.category("a")

    def test_str(self) -> None:
        assert str(QueryMode.unfiltered()) == "unfiltered"
        assert str(QueryMode.search("phone")) == "search(phone)"
