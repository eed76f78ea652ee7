"""Chart facade and export helpers built on the core engine."""
