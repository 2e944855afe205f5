"""One Clicker: an incremental game of coins and the machines that mine, move and combine them."""

__version__ = "0.1.3"