"""Host-side training helpers built on the core propagators."""
