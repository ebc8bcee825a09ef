import boto3
from botocore.exceptions import ClientError
from typing import Optional
from urllib.parse import quote

from covid_stats.domain.errors import StorageError
from covid_stats.storage.interface import KeyValueStore

class S3KeyValueStore(KeyValueStore):
    """
    Implements the key-value store using AWS S3, one object per key.
    """
    
    def __init__(self, bucket_name: str, prefix: str = "cache/", aws_access_key_id: str = None,
                 aws_secret_access_key: str = None, region_name: str = None, client=None):
        """
        Initialize S3 storage.
        
        Args:
            bucket_name: S3 bucket name
            prefix: Key prefix under which all cache objects live
            aws_access_key_id: AWS access key ID (if None, uses environment variables)
            aws_secret_access_key: AWS secret access key (if None, uses environment variables)
            region_name: AWS region name (if None, uses environment variables)
            client: Pre-built S3 client, mainly for tests
        """
        self.bucket_name = bucket_name
        self.prefix = prefix
        
        # If credentials are not provided, boto3 will look for them in environment variables
        self.s3_client = client or boto3.client(
            's3',
            aws_access_key_id=aws_access_key_id or None,
            aws_secret_access_key=aws_secret_access_key or None,
            region_name=region_name
        )
        
        # Ensure bucket exists
        self._ensure_bucket_exists()
    
    def _ensure_bucket_exists(self):
        """Ensure the S3 bucket exists, create it if it doesn't."""
        try:
            self.s3_client.head_bucket(Bucket=self.bucket_name)
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code')
            if error_code == '404':
                # Bucket doesn't exist, create it
                self.s3_client.create_bucket(Bucket=self.bucket_name)
            else:
                # Another error occurred
                raise
    
    def _object_key(self, key: str) -> str:
        return f"{self.prefix}{quote(key, safe='')}"
    
    def get(self, key: str) -> Optional[str]:
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=self._object_key(key))
            return response['Body'].read().decode('utf-8')
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in ('NoSuchKey', '404'):
                return None
            raise StorageError(f"Failed to read key {key!r} from S3: {e}") from e
    
    def set(self, key: str, value: str) -> bool:
        # A single PutObject is atomic from the reader's point of view
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=self._object_key(key),
                Body=value.encode('utf-8'),
                ContentType='application/json'
            )
        except ClientError as e:
            raise StorageError(f"Failed to write key {key!r} to S3: {e}") from e
        return True
    
    def remove(self, key: str) -> bool:
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=self._object_key(key))
        except ClientError as e:
            raise StorageError(f"Failed to remove key {key!r} from S3: {e}") from e
        return True
    
    def clear(self) -> bool:
        try:
            paginator = self.s3_client.get_paginator('list_objects_v2')
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=self.prefix):
                for entry in page.get('Contents', []):
                    self.s3_client.delete_object(Bucket=self.bucket_name, Key=entry['Key'])
        except ClientError as e:
            raise StorageError(f"Failed to clear S3 prefix {self.prefix!r}: {e}") from e
        return True 
