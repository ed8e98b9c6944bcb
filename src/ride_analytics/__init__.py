"""Training-load and real-time zone analytics for indoor cycling sessions."""

__version__ = "0.1.0"
