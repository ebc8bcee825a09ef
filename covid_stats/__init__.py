"""
covid_stats Application Package

Directory Structure:
├── routers/           # FastAPI route handlers
├── schemas/           # Pydantic models for API responses
├── domain/            # Value objects, outcomes, errors and events
├── infrastructure/    # disease.sh client and connectivity probes
├── services/          # Freshness policy engine
│   └── cache/         # Staleness rule and cache key namespacing
├── storage/           # Key-value store backends (filesystem, memory, S3)
└── config.py          # Application configuration

Data Flow:
1. A router asks ``CovidDataService`` for countries, a country, or a series
2. The service probes connectivity and checks the freshness marker
3. Remote results are persisted through ``CovidCacheStorage``
4. Cache is the fallback whenever remote is skipped, fails, or raises
"""
