"""Qt user interface: main window and error notification."""
