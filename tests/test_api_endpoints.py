"""
Tests for the HTTP endpoints.
"""
from covid_stats.dependencies import get_connectivity_probe
from covid_stats.infrastructure.connectivity import HttpConnectivityProbe
from covid_stats.infrastructure.disease_api import ProviderResult
from covid_stats.main import app
from tests.conftest import FRANCE, HOUR_MS, START_MS, USA, USA_HISTORICAL

FAILED = ProviderResult(success=False, error="HTTP 500")


class TestHealthEndpoints:
    """Test health checks."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "message" in response.json()

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_cache_health_reports_marker(self, client, cache, clock):
        cache.save_countries([USA], START_MS)

        data = client.get("/health/cache").json()

        assert data["status"] == "healthy"
        assert data["online"] is True
        assert data["cache"]["last_update"] == START_MS
        assert data["cache"]["stale"] is False
        assert data["cache"]["cache_duration_ms"] == HOUR_MS

    def test_cache_health_before_any_connectivity_check(self, client):
        app.dependency_overrides[get_connectivity_probe] = lambda: HttpConnectivityProbe("https://disease.test/")

        data = client.get("/health/cache").json()

        assert data["status"] == "healthy"
        assert data["online"] is None


class TestCountryListEndpoints:
    """Test list and refresh endpoints."""

    def test_list_countries_fresh(self, client, provider):
        response = client.get("/countries")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["fromCache"] is False
        assert "message" not in body
        assert [c["country"] for c in body["data"]] == ["USA", "France"]

    def test_second_call_is_served_from_cache(self, client, provider):
        client.get("/countries")
        body = client.get("/countries").json()

        assert body["fromCache"] is True
        provider.get_all_countries.assert_awaited_once()

    def test_search_and_sort(self, client):
        body = client.get("/countries", params={"sort": "cases"}).json()
        assert [c["country"] for c in body["data"]] == ["France", "USA"]

        body = client.get("/countries", params={"search": "us"}).json()
        assert [c["country"] for c in body["data"]] == ["USA"]

    def test_unknown_sort_is_rejected_before_fetching(self, client, provider, cache):
        response = client.get("/countries", params={"sort": "deaths"})
        assert response.status_code == 400

        response = client.post("/countries/refresh", params={"sort": "deaths"})
        assert response.status_code == 400

        assert provider.get_all_countries.await_count == 0
        assert cache.get_countries() is None
        assert cache.get_last_update() is None

    def test_refresh_forces_remote(self, client, provider):
        client.get("/countries")
        body = client.post("/countries/refresh").json()

        assert body["fromCache"] is False
        assert provider.get_all_countries.await_count == 2

    def test_unavailable_list(self, client, provider):
        provider.get_all_countries.return_value = FAILED

        response = client.get("/countries")

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "data": [],
            "fromCache": False,
            "error": "No data available",
        }

    def test_offline_fallback_message(self, client, provider, probe, cache, clock):
        cache.save_countries([USA, FRANCE], START_MS)
        clock.advance(2 * HOUR_MS)
        probe.set_status(False)

        body = client.get("/countries").json()

        assert body["fromCache"] is True
        assert body["message"] == "Using cached data (offline or API unavailable)"


class TestCountryDetailEndpoints:
    """Test single-country and historical endpoints."""

    def test_country_details_include_rates(self, client):
        body = client.get("/countries/USA").json()

        assert body["success"] is True
        assert body["data"]["country"] == "USA"
        assert body["data"]["deathRate"] == "2.50"
        assert body["data"]["recoveryRate"] == "90.00"
        assert body["data"]["activeRate"] == "7.50"

    def test_country_details_unavailable_is_404(self, client, provider):
        provider.get_country.return_value = FAILED

        response = client.get("/countries/Atlantis")

        assert response.status_code == 404
        assert response.json()["error"] == "Country data not available"

    def test_historical_includes_chart_and_latest(self, client, provider):
        body = client.get("/countries/USA/historical", params={"days": "30"}).json()

        assert body["success"] is True
        assert body["data"]["timeline"] == USA_HISTORICAL["timeline"]
        assert body["data"]["chart"] == [
            {"date": "3/1", "cases": 10, "deaths": 1, "recovered": 0},
            {"date": "3/2", "cases": 20, "deaths": 0, "recovered": 0},
        ]
        assert body["data"]["latest"] == {"date": "3/2/21", "cases": 20, "deaths": 0, "recovered": 0}
        provider.get_historical.assert_awaited_once_with("USA", "30")

    def test_historical_max_points(self, client):
        body = client.get("/countries/USA/historical", params={"max_points": 1}).json()
        assert [p["date"] for p in body["data"]["chart"]] == ["3/1"]

    def test_historical_rejects_bad_days(self, client, provider):
        response = client.get("/countries/USA/historical", params={"days": "-3"})

        assert response.status_code == 400
        provider.get_historical.assert_not_called()

    def test_historical_unavailable_is_404(self, client, provider):
        provider.get_historical.return_value = FAILED

        response = client.get("/countries/USA/historical")

        assert response.status_code == 404
        assert response.json()["error"] == "Historical data not available"


class TestCacheEndpoint:
    """Test cache clearing."""

    def test_clear_country_historical(self, client, cache):
        cache.save_historical("USA", USA_HISTORICAL)
        cache.save_historical("France", USA_HISTORICAL)

        response = client.delete("/countries/USA/historical")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert cache.get_historical("USA") is None
        assert cache.get_historical("France") is not None

    def test_clear_cache(self, client, cache):
        cache.save_countries([USA], START_MS)

        response = client.delete("/cache")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert cache.get_countries() is None
