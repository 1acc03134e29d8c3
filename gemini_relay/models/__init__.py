"""Model gateway layer: content parts and the provider that talks to Gemini."""
