"""
gemini-relay: a thin HTTP façade in front of the Gemini generative model.

Text, image, document and audio payloads are accepted over HTTP, forwarded
to the model as a single request and the textual reply is relayed back.
"""

__version__ = "1.0.0"
