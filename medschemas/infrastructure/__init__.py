"""Infrastructure layer: configuration and logging for the CLI tooling."""
