"""
Tests for connectivity probes.
"""
import httpx

from covid_stats.domain.events import ConnectivityChanged, event_publisher
from covid_stats.infrastructure.connectivity import HttpConnectivityProbe, StaticConnectivityProbe
from tests.conftest import run


class TestStaticConnectivityProbe:
    """Test manual status and change notification."""

    def test_reports_current_status(self):
        probe = StaticConnectivityProbe(initial=False)
        assert run(probe.current_status()) is False
        probe.set_status(True)
        assert run(probe.current_status()) is True

    def test_listeners_fire_only_on_flip(self):
        probe = StaticConnectivityProbe(initial=True)
        seen = []
        probe.on_change(seen.append)

        probe.set_status(True)
        probe.set_status(False)
        probe.set_status(False)
        probe.set_status(True)

        assert seen == [False, True]

    def test_unsubscribe(self):
        probe = StaticConnectivityProbe()
        seen = []
        unsubscribe = probe.on_change(seen.append)
        unsubscribe()
        probe.set_status(False)
        assert seen == []

    def test_failing_listener_does_not_block_others(self):
        probe = StaticConnectivityProbe()
        seen = []

        def broken(online):
            raise RuntimeError("listener bug")

        probe.on_change(broken)
        probe.on_change(seen.append)
        probe.set_status(False)

        assert seen == [False]
        assert probe.last_known is False

    def test_flip_publishes_event(self):
        events = []
        event_publisher.subscribe(ConnectivityChanged, events.append)
        probe = StaticConnectivityProbe()

        probe.set_status(False)

        assert len(events) == 1
        assert events[0].online is False


class TestHttpConnectivityProbe:
    """Test HEAD-based reachability."""

    def test_any_response_means_online(self):
        probe = HttpConnectivityProbe(
            "https://disease.test/",
            transport=httpx.MockTransport(lambda request: httpx.Response(503)),
        )
        assert run(probe.current_status()) is True

    def test_transport_error_means_offline(self):
        def handler(request):
            raise httpx.ConnectError("no network", request=request)

        probe = HttpConnectivityProbe("https://disease.test/", transport=httpx.MockTransport(handler))
        seen = []
        probe.on_change(seen.append)

        assert run(probe.current_status()) is False
        assert probe.last_known is False
        assert seen == [False]

    def test_status_is_unknown_until_first_check(self):
        probe = HttpConnectivityProbe(
            "https://disease.test/",
            transport=httpx.MockTransport(lambda request: httpx.Response(200)),
        )
        seen = []
        probe.on_change(seen.append)

        assert probe.last_known is None
        assert run(probe.current_status()) is True
        assert probe.last_known is True
        assert seen == [True]
