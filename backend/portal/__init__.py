"""Support portal data API."""
