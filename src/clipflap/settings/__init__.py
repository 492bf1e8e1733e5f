from .schema import ClipOptions, ErrorMessages, load_options

__all__ = ["ClipOptions", "ErrorMessages", "load_options"]
