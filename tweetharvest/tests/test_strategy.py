"""Tests for strategy selection and the auto-mode profile lookup."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from tweetharvest.strategy import (
    PROFILE_THRESHOLD,
    Strategy,
    StrategyMode,
    extract_post_count,
    select_strategy,
)


def _nitter_page(count: str) -> str:
    return f"""
    <div class="profile-card-extra">
      <ul class="profile-statlist">
        <li class="posts">
          <span class="profile-stat-header">Tweets</span>
          <span class="profile-stat-num">{count}</span>
        </li>
        <li class="followers">
          <span class="profile-stat-header">Followers</span>
          <span class="profile-stat-num">99,999</span>
        </li>
      </ul>
    </div>
    """


class TestExtractPostCount:
    def test_nitter_with_separators(self) -> None:
        assert extract_post_count(_nitter_page("12,345")) == 12345

    def test_legacy_profile_nav(self) -> None:
        html = '<li class="ProfileNav-item ProfileNav-item--tweets"><a data-count=2048 href="/foo">'
        assert extract_post_count(html) == 2048

    def test_embedded_json(self) -> None:
        assert extract_post_count('{"statuses_count": 77}') == 77

    def test_nothing_found(self) -> None:
        assert extract_post_count("<html><title>x</title></html>") is None


class TestSelectStrategy:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("mode", "expected"),
        [(StrategyMode.INTERVAL, Strategy.INTERVAL), (StrategyMode.PROFILE, Strategy.PROFILE)],
    )
    async def test_explicit_modes_skip_lookup(self, mode: StrategyMode, expected: Strategy) -> None:
        with patch("tweetharvest.strategy.fetch_profile_page", new=AsyncMock()) as fetch:
            assert await select_strategy("foo", mode) is expected
        fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_small_account_gets_profile(self) -> None:
        page = _nitter_page(str(PROFILE_THRESHOLD))
        with patch("tweetharvest.strategy.fetch_profile_page", new=AsyncMock(return_value=page)) as fetch:
            result = await select_strategy(
                "foo", StrategyMode.AUTO, profile_url="https://example.org/{handle}"
            )
        assert result is Strategy.PROFILE
        assert fetch.call_args.args == ("https://example.org/{handle}", "foo")

    @pytest.mark.asyncio
    async def test_large_account_gets_interval(self) -> None:
        page = _nitter_page(str(PROFILE_THRESHOLD + 1))
        with patch("tweetharvest.strategy.fetch_profile_page", new=AsyncMock(return_value=page)):
            assert await select_strategy("foo", StrategyMode.AUTO) is Strategy.INTERVAL

    @pytest.mark.asyncio
    async def test_unreadable_page_gets_interval(self) -> None:
        with patch("tweetharvest.strategy.fetch_profile_page", new=AsyncMock(return_value="<html/>")):
            assert await select_strategy("foo", StrategyMode.AUTO) is Strategy.INTERVAL

    @pytest.mark.asyncio
    async def test_lookup_failure_is_recovered(self) -> None:
        boom = AsyncMock(side_effect=httpx.ConnectError("unreachable"))
        with patch("tweetharvest.strategy.fetch_profile_page", new=boom):
            assert await select_strategy("foo", StrategyMode.AUTO) is Strategy.INTERVAL
