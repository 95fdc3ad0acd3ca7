"""Application layer: settings, logging, shortcuts and scene loading."""
