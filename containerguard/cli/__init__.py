"""Command-line interface for ContainerGuard."""
