"""HTTP API for backup-monitor."""
