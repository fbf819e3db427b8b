"""Chess position model, legal-move engine and engine-session wiring."""

__version__ = "0.1.0"
