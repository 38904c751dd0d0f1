"""Planning poker rooms: in-memory estimation sessions served over FastAPI."""

__version__ = "0.1.0"
