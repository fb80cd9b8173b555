"""Unit tests for the service provider and per-pass instance resolver."""

from abc import ABC, abstractmethod

import pytest

from toolscout.tools import InstanceResolutionError, InstanceResolver, ServiceProvider


class Clock:
    def now(self) -> str:
        return "12:00"


class Scheduler:
    def __init__(self, clock: Clock, timezone: str = "UTC") -> None:
        self.clock = clock
        self.timezone = timezone


class NeedsApiKey:
    def __init__(self, api_key: str) -> None:
        self.api_key = api_key


class OptionalClock:
    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock


class DefaultedClock:
    def __init__(self, clock: Clock = None) -> None:  # type: ignore[assignment]
        self.clock = clock


class Exploding:
    def __init__(self) -> None:
        raise RuntimeError("boom")


class Abstract(ABC):
    @abstractmethod
    def run(self) -> None: ...


class Chicken:
    def __init__(self, egg: "Egg") -> None:
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken) -> None:
        self.chicken = chicken


class TestServiceProvider:
    """Tests for ServiceProvider lookup and construction."""

    def test_lookup_unregistered_returns_none(self):
        assert ServiceProvider().lookup(Clock) is None

    def test_lookup_provider_returns_itself(self):
        services = ServiceProvider()
        assert services.lookup(ServiceProvider) is services
        assert services.is_registered(ServiceProvider)

    def test_registered_instance_is_singleton(self):
        services = ServiceProvider()
        clock = Clock()
        services.register_instance(Clock, clock)

        assert services.lookup(Clock) is clock
        assert services.resolve_or_create(Clock) is clock

    def test_factory_called_on_every_lookup(self):
        services = ServiceProvider()
        calls = []

        def make_clock(provider: ServiceProvider) -> Clock:
            calls.append(provider)
            return Clock()

        services.register_factory(Clock, make_clock)

        first = services.lookup(Clock)
        second = services.lookup(Clock)

        assert first is not second
        assert calls == [services, services]

    def test_failing_factory_raises_resolution_error(self):
        services = ServiceProvider()

        def broken(provider: ServiceProvider) -> Clock:
            raise OSError("no clock hardware")

        services.register_factory(Clock, broken)

        with pytest.raises(InstanceResolutionError, match="no clock hardware") as exc_info:
            services.lookup(Clock)
        assert exc_info.value.service_type is Clock

    def test_constructs_dependencies_recursively(self):
        scheduler = ServiceProvider().resolve_or_create(Scheduler)

        assert isinstance(scheduler.clock, Clock)
        assert scheduler.timezone == "UTC"

    def test_registered_dependency_is_injected(self):
        services = ServiceProvider()
        clock = Clock()
        services.register_instance(Clock, clock)

        assert services.resolve_or_create(Scheduler).clock is clock
        assert services.resolve_or_create(DefaultedClock).clock is clock

    def test_unregistered_dependency_with_default_keeps_default(self):
        services = ServiceProvider()

        assert services.resolve_or_create(DefaultedClock).clock is None
        assert services.resolve_or_create(OptionalClock).clock is None

    def test_builtin_parameter_without_default_fails(self):
        with pytest.raises(InstanceResolutionError, match="api_key") as exc_info:
            ServiceProvider().resolve_or_create(NeedsApiKey)
        assert exc_info.value.service_type is NeedsApiKey

    def test_registered_builtin_parameter_is_resolved(self):
        services = ServiceProvider()
        services.register_instance(str, "secret")

        assert services.resolve_or_create(NeedsApiKey).api_key == "secret"

    def test_constructor_exception_is_wrapped(self):
        with pytest.raises(InstanceResolutionError, match="Constructor of Exploding raised: boom"):
            ServiceProvider().resolve_or_create(Exploding)

    def test_abstract_class_cannot_be_constructed(self):
        with pytest.raises(InstanceResolutionError, match="abstract"):
            ServiceProvider().resolve_or_create(Abstract)

    def test_circular_dependency_detected(self):
        with pytest.raises(
            InstanceResolutionError, match="Circular dependency: Chicken -> Egg -> Chicken"
        ):
            ServiceProvider().resolve_or_create(Chicken)


class TestInstanceResolver:
    """Tests for InstanceResolver caching within one pass."""

    def test_resolves_once_per_class(self):
        services = ServiceProvider()
        calls = []
        services.register_factory(Clock, lambda provider: calls.append(1) or Clock())

        resolver = InstanceResolver(services)
        first = resolver.resolve(Clock)
        second = resolver.resolve(Clock)

        assert first is second
        assert len(calls) == 1
        assert resolver.resolution_count == 1

    def test_prefers_registered_instance(self):
        services = ServiceProvider()
        clock = Clock()
        services.register_instance(Clock, clock)

        assert InstanceResolver(services).resolve(Clock) is clock

    def test_failure_is_cached(self):
        resolver = InstanceResolver(ServiceProvider())

        with pytest.raises(InstanceResolutionError) as first:
            resolver.resolve(NeedsApiKey)
        with pytest.raises(InstanceResolutionError) as second:
            resolver.resolve(NeedsApiKey)

        assert first.value is second.value
        assert resolver.resolution_count == 1

    def test_new_resolver_starts_empty(self):
        services = ServiceProvider()

        first = InstanceResolver(services).resolve(Clock)
        second = InstanceResolver(services).resolve(Clock)

        assert first is not second
