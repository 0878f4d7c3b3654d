"""StoreIt backend — file records, sharing and storage usage."""

__version__ = "0.1.0"
