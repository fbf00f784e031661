"""Data access layer: clients for ESI and zKillboard."""
