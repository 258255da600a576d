"""Window controllers for the main list, quick capture and settings."""
