"""Water-level forecasting service: routing model, regression fallback and HTTP API."""
