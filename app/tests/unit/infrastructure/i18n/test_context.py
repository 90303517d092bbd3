"""Tests for infrastructure.i18n.context module."""

import asyncio
import threading

import pytest
import structlog

from infrastructure.i18n.context import (
    clear_current_locale,
    get_current_locale,
    locale_scope,
    reset_current_locale,
    set_current_locale,
)
from tests.factories import make_locale


class TestCurrentLocale:
    """Tests for the ambient current locale."""

    def test_unbound_by_default(self):
        """No locale is bound outside a request."""
        assert get_current_locale() is None

    def test_set_and_clear(self):
        """set_current_locale() binds and clear_current_locale() unbinds."""
        set_current_locale(make_locale("fr"))
        assert get_current_locale() == make_locale("fr")
        clear_current_locale()
        assert get_current_locale() is None

    def test_reset_restores_previous(self):
        """reset_current_locale() restores the value before the set."""
        set_current_locale(make_locale("fr"))
        token = set_current_locale(make_locale("zh-CN"))
        reset_current_locale(token)
        assert get_current_locale() == make_locale("fr")

    def test_locale_scope(self):
        """locale_scope() binds for the block and restores afterwards."""
        with locale_scope(make_locale("zh-CN")) as locale:
            assert locale == make_locale("zh-CN")
            assert get_current_locale() == make_locale("zh-CN")
            assert structlog.contextvars.get_contextvars()["locale"] == "zh-CN"
        assert get_current_locale() is None
        assert "locale" not in structlog.contextvars.get_contextvars()

    def test_locale_scope_restores_on_exception(self):
        """locale_scope() unbinds when the block raises."""
        with pytest.raises(RuntimeError):
            with locale_scope(make_locale("fr")):
                raise RuntimeError("boom")
        assert get_current_locale() is None

    def test_nested_scopes(self):
        """Nested scopes restore the outer locale."""
        with locale_scope(make_locale("fr")):
            with locale_scope(make_locale("zh-CN")):
                assert get_current_locale() == make_locale("zh-CN")
            assert get_current_locale() == make_locale("fr")


class TestIsolation:
    """Concurrent units of work never see each other's locale."""

    def test_threads_isolated(self):
        """Each thread sees only the locale it bound."""
        tags = ["fr", "zh-CN", "en-US", "ja"]
        barrier = threading.Barrier(len(tags))
        seen = {}

        def worker(tag):
            set_current_locale(make_locale(tag))
            barrier.wait()
            seen[tag] = get_current_locale()
            clear_current_locale()

        threads = [threading.Thread(target=worker, args=(tag,)) for tag in tags]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert seen == {tag: make_locale(tag) for tag in tags}
        assert get_current_locale() is None

    @pytest.mark.asyncio
    async def test_tasks_isolated(self):
        """Each asyncio task sees only the locale it bound."""

        async def handle(tag):
            with locale_scope(make_locale(tag)):
                await asyncio.sleep(0)
                await asyncio.sleep(0)
                return get_current_locale()

        results = await asyncio.gather(handle("fr"), handle("zh-CN"), handle("de"))

        assert results == [make_locale("fr"), make_locale("zh-CN"), make_locale("de")]
        assert get_current_locale() is None
