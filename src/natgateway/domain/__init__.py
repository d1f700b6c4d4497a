"""Domain layer - resource model, handler contracts and exceptions."""
