"""Host integrations for linepad."""
