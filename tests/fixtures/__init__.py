"""Test fixtures: Gemini outputs captured for the book analysis and movie
results prompts, stored as the parsed JSON objects the client returns."""
