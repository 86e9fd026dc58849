"""Calculator microservice: arithmetic operations over HTTP GET requests."""

__version__ = "1.0.0"
