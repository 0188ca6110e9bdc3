"""JSON fixtures bundled with the mock provider."""
