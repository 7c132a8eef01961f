"""Fusion+ web layer: request contracts, service and controllers."""
