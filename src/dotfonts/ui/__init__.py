from .spinner import Spinner

__all__ = ["Spinner"]
