"""Host-facing layer: error reporting, sessions, the interactive shell and logging setup."""
