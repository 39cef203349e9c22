"""Live contact-center agent idle monitor."""
