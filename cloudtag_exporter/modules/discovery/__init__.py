"""Tag-based resource discovery."""
