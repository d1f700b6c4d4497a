"""Infrastructure layer - AWS client management."""
