"""Core services for nmsweep: configuration, theming, logging and orchestration."""
