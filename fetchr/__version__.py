__title__ = "fetchr"
__description__ = "A small command line HTTP client."
__version__ = "0.1.0"
