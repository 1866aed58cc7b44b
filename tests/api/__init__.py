"""Live REST API scenarios and UI/API consistency checks."""
