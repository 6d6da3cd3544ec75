"""Cache storage tables - buckets and their stored responses."""

CACHE_BUCKET_DDL = """
CREATE TABLE IF NOT EXISTS cache_bucket (
    name VARCHAR PRIMARY KEY,
    created_at TIMESTAMP NOT NULL
)
"""

CACHE_ENTRY_DDL = """
CREATE TABLE IF NOT EXISTS cache_entry (
    cache_name VARCHAR NOT NULL,
    method VARCHAR NOT NULL,
    url VARCHAR NOT NULL,
    status_code INTEGER NOT NULL,
    headers JSON NOT NULL,
    content BLOB NOT NULL,
    stored_at TIMESTAMP NOT NULL,
    PRIMARY KEY (cache_name, method, url)
)
"""
