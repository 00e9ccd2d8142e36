"""Infrastructure layer - configuration, logging setup, remote catalog client."""
