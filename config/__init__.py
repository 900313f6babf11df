"""Environment-driven configuration for Find The Imposter."""
