"""mindhaven mental-health support API."""
