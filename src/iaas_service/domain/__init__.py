"""Domain layer - resource models, value objects, ports and exceptions."""
