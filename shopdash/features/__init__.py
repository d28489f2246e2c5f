"""Feature slices: data platform, inventory, sales, customers, analytics."""
