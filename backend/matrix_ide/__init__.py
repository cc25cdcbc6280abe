"""Matrix IDE node-graph backend: scheduling, simulated execution and code generation."""
__version__ = "0.1.0"
