"""
S3 Upload Configuration.
Constants for object key generation and public URL construction.
"""

# Object Key Settings
KEY_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"   # Second granularity, e.g. 20240131235959
KEY_TOKEN_LENGTH = 8                    # Hex chars of random token (unique keys only)

# Public URL template (virtual-hosted style)
OBJECT_URL_TEMPLATE = "https://{bucket}.s3.{region}.amazonaws.com/{key}"
