"""Runtime services shared by every linepad layer."""
