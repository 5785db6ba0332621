"""Front ends that embed the engine."""
