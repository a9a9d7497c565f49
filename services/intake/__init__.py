"""Input collection: turn locale-specific form text into calculator Inputs."""
