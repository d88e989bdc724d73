"""HTTP layer: routes, request models, error handlers and middleware."""
