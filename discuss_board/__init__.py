"""Discussion board backend package."""
