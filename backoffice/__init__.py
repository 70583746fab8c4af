"""Back-office field rendering for admin UIs."""
