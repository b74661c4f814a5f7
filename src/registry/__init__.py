"""Index parsing and registry aggregation."""
