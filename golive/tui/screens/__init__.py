"""Screen definitions. Importing this package registers every screen."""
from . import live, main, utils  # noqa: F401
