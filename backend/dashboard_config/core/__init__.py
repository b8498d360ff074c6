"""Static catalogs, configuration and shared helpers."""
