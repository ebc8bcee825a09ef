from covid_stats.storage.interface import KeyValueStore
from covid_stats.storage.filesystem import FilesystemKeyValueStore
from covid_stats.storage.memory import MemoryKeyValueStore
from covid_stats.config import settings

def get_store() -> KeyValueStore:
    """
    Factory function to create the appropriate key-value store
    based on environment variables.
    
    Returns:
        A store implementation (S3, Filesystem or Memory)
    """
    # Determine which storage to use
    storage_type = settings.STORAGE_TYPE.lower()
    
    if storage_type == "s3":
        # Imported lazily so boto3 is only touched when S3 is configured
        from covid_stats.storage.s3 import S3KeyValueStore
        
        if not settings.S3_BUCKET:
            raise ValueError("S3_BUCKET must be set when using S3 storage")
        
        return S3KeyValueStore(
            bucket_name=settings.S3_BUCKET,
            prefix=settings.S3_PREFIX,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            region_name=settings.AWS_REGION
        )
    if storage_type == "memory":
        return MemoryKeyValueStore()
    
    # Use filesystem storage
    return FilesystemKeyValueStore(base_dir=settings.CACHE_STORAGE_DIR)
