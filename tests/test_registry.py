"""Tests for ProxyRegistry."""

import pytest

from morphotest import ClassAlreadyExistsException, GeneratedClass, ProxyRegistry
from morphotest.registry import MOCK, PROXY
from tests.shared import Counter, MailService


class TestProxyRegistry:
    def setup_method(self):
        self.registry = ProxyRegistry()

    def test_register_and_get(self):
        generated = type("GeneratedCounter", (Counter,), {})
        record = self.registry.register(generated, Counter, PROXY)

        assert record == GeneratedClass("GeneratedCounter", generated, Counter, PROXY)
        assert self.registry.get("GeneratedCounter") is generated
        assert "GeneratedCounter" in self.registry
        assert len(self.registry) == 1

    def test_get_unknown(self):
        assert self.registry.get("Nope") is None

    def test_duplicate_name(self):
        self.registry.register(type("Same", (Counter,), {}), Counter, PROXY)
        with pytest.raises(ClassAlreadyExistsException, match='"Same" already exists'):
            self.registry.register(type("Same", (Counter,), {}), Counter, MOCK)

    def test_generated_for_filters_by_original_and_kind(self):
        proxy = type("P", (Counter,), {})
        mock = type("M", (Counter,), {})
        other = type("O", (MailService,), {})
        self.registry.register(proxy, Counter, PROXY)
        self.registry.register(mock, Counter, MOCK)
        self.registry.register(other, MailService, MOCK)

        assert self.registry.generated_for(Counter) == [proxy, mock]
        assert self.registry.generated_for(Counter, kind=MOCK) == [mock]

    def test_clear(self):
        self.registry.register(type("P", (Counter,), {}), Counter, PROXY)
        self.registry.clear()

        assert len(self.registry) == 0
        assert "P" not in self.registry
