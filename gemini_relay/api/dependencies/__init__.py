"""
FastAPI dependencies: shared configuration, the model gateway and upload staging.
"""
