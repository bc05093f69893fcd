"""Test helpers: fake Gemini API, event recorder and stand-in transports."""
