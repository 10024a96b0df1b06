"""Application layer: poll cycle orchestration and scheduling."""
