from covid_stats.config import settings
from covid_stats.dependencies import get_cache_storage

def reset_cache():
    """Drop every cached entry, including the freshness marker."""
    cache = get_cache_storage()
    
    print(f"Clearing {settings.STORAGE_TYPE} cache store...")
    if cache.clear_all():
        print("Cache has been reset successfully!")
        print("The next country list request will fetch from the remote API.")
    else:
        print("Cache could not be cleared; see the log for details.")

if __name__ == "__main__":
    confirm = input("This will DELETE ALL CACHED DATA. Are you sure? (y/n): ")
    if confirm.lower() == 'y':
        reset_cache()
    else:
        print("Operation cancelled.")
