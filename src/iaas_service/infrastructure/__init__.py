"""Infrastructure layer - logging and state polling."""
