"""Output layer: rendering ServiceResult for humans and machines."""
