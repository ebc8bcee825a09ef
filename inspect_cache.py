#!/usr/bin/env python3
"""
Debug script to check what the offline cache holds.
"""
from datetime import datetime

from covid_stats.config import settings
from covid_stats.dependencies import get_cache_policy, get_cache_storage

def check_cache_contents():
    print("=== Checking Cache Contents ===")
    
    cache = get_cache_storage()
    policy = get_cache_policy()
    
    last_update = cache.get_last_update()
    if last_update:
        print(f"Last update: {datetime.fromtimestamp(last_update / 1000).isoformat()}")
    else:
        print("Last update: never")
    print(f"Stale: {policy.is_stale(last_update)} (window {settings.CACHE_DURATION_MS} ms)")
    
    countries = cache.get_countries()
    print(f"Cached countries: {len(countries) if countries is not None else 'none'}")
    
    keys = getattr(cache.store, "keys", None)
    if keys is not None:
        for key in keys():
            print(f"  key: {key}")

if __name__ == "__main__":
    check_cache_contents()
