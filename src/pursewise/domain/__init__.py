"""Domain layer: repository protocols and update patches."""
