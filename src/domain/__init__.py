"""Domain layer: business rules for items, independent of HTTP and storage."""
