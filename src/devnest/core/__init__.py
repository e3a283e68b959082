"""Detection, measurement and cleanup engine."""
