"""Application layer: services shared by the user interfaces."""
