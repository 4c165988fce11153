"""ZaiBoost order-management API package."""
