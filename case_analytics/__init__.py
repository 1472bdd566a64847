"""Analytics aggregation for case and task dashboards."""
