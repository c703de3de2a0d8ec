"""S3-compatible object storage (Cloudflare R2, AWS S3, MinIO) via aioboto3."""

from typing import List, Optional

import aioboto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config import StorageConfig
from .._utils import logger
from .base import BaseObjectStorage, ObjectHead

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


def _is_not_found(error: ClientError) -> bool:
    code = str(error.response.get("Error", {}).get("Code", ""))
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return code in _NOT_FOUND_CODES or status == 404


class S3ObjectStorage(BaseObjectStorage):
    """Read-only view of a bucket on any S3-compatible endpoint."""

    def __init__(self, config: StorageConfig, session: Optional[aioboto3.Session] = None):
        if not config.bucket:
            raise ValueError("S3 storage requires a bucket name")
        self.config = config
        self.bucket = config.bucket
        self.session = session or aioboto3.Session(
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            region_name=config.region,
        )
        # No retries: a failed call is reported as a missing object upstream.
        self._client_config = Config(
            connect_timeout=config.request_timeout,
            read_timeout=config.request_timeout,
            retries={"max_attempts": 1, "mode": "standard"},
        )

    def _client(self):
        return self.session.client(
            "s3",
            endpoint_url=self.config.endpoint_url,
            config=self._client_config,
        )

    async def list_prefixes(self, prefix: str, delimiter: str = "/") -> List[str]:
        prefixes: List[str] = []
        async with self._client() as s3:
            paginator = s3.get_paginator("list_objects_v2")
            async for page in paginator.paginate(
                Bucket=self.bucket,
                Prefix=prefix,
                Delimiter=delimiter,
            ):
                for entry in page.get("CommonPrefixes", []) or []:
                    prefixes.append(entry["Prefix"])
        logger.debug(f"Listed {len(prefixes)} prefixes under s3://{self.bucket}/{prefix}")
        return prefixes

    async def get(self, key: str) -> Optional[bytes]:
        async with self._client() as s3:
            try:
                response = await s3.get_object(Bucket=self.bucket, Key=key)
            except ClientError as e:
                if _is_not_found(e):
                    return None
                raise
            async with response["Body"] as stream:
                return await stream.read()

    async def head(self, key: str) -> Optional[ObjectHead]:
        async with self._client() as s3:
            try:
                response = await s3.head_object(Bucket=self.bucket, Key=key)
            except ClientError as e:
                if _is_not_found(e):
                    return None
                raise
        return ObjectHead(key=key, size=int(response.get("ContentLength", 0)))
