"""Core domain primitives shared across the admin and templating layers."""
