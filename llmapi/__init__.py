"""Request and response models, stream reading and schema validation for an assistants-style LLM API."""

__version__ = "0.1.0"