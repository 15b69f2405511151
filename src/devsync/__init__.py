"""devsync - entity search engine for the DevSync knowledge-sharing backend"""

__version__ = "0.1.0"
