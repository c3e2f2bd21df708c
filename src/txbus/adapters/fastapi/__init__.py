"""FastAPI adapter – Result → HTTP response mapping."""
from txbus.adapters.fastapi.responses import result_response

__all__ = ["result_response"]
