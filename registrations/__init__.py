"""Public evacuation registration intake and its staff-only listing."""
