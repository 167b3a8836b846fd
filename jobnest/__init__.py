"""JobNest - job board API."""
