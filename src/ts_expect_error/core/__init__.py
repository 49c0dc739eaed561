"""Run driver and result aggregation."""
