"""Fixed, non-configurable limits."""

# Per-user storage quota: 2 GiB
STORAGE_QUOTA_BYTES = 2 * 1024 * 1024 * 1024

DEFAULT_SORT = "createdAt-desc"
